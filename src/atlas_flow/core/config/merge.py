"""
Deep-merge de configuração do Atlas Flow.

Política de merge (v1):
    - dict + dict → merge recursivo por chave
    - list        → sobrescrita total (a lista de Steps do override
                    substitui a dos defaults por inteiro)
    - None        → em qualquer lado, sobrescrita direta sem conflito
    - escalar     → sobrescrita direta
    - tipos distintos → ConfigTypeConflictError

Invariantes:
    - Nenhum input é mutado
    - A mesma entrada sempre produz a mesma saída
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _merge_value(key: str, base_value: Any, override_value: Any) -> Any:
    if isinstance(base_value, dict) and isinstance(override_value, dict):
        return deep_merge(base_value, override_value)

    if base_value is None or override_value is None or isinstance(override_value, list):
        return deepcopy(override_value)

    # bool é subclasse de int; a comparação é por tipo exato
    if type(base_value) is not type(override_value):
        raise ConfigTypeConflictError(
            f"Conflito de tipo na chave '{key}': "
            f"{type(base_value).__name__} vs {type(override_value).__name__}"
        )

    return deepcopy(override_value)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `base` e `override` em um novo dicionário.

    Args:
        base: Configuração base (defaults).
        override: Overrides explícitos (local).

    Returns:
        Novo dicionário com o resultado do merge.

    Raises:
        ConfigTypeConflictError: Se a raiz não for dict ou se uma chave
            tiver tipos incompatíveis entre base e override.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)
    for key, override_value in override.items():
        if key in result:
            result[key] = _merge_value(key, result[key], override_value)
        else:
            result[key] = deepcopy(override_value)
    return result
