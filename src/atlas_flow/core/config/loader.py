"""
Loader de configuração do Atlas Flow.

A configuração efetiva é resolvida a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional; ignorado se não existir)

O conteúdo costuma ser uma definição de Flow (chave raiz `flow`, ver
`atlas_flow.core.engine.builder`), mas o loader não interpreta o schema.

Princípios fundamentais:
    - Configuração é declarativa e explícita
    - Overrides nunca mutam os defaults
    - Erros estruturais são falhas fatais

Limites explícitos:
    - Não valida a definição de Flow
    - Não importa Steps
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge

PathLike = Union[str, Path]


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo YAML/JSON e valida que a raiz é um dicionário.

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_config(
    *,
    defaults_path: PathLike,
    local_path: Optional[PathLike] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva.

    Quando `local_path` é informado e existe, seu conteúdo tem prioridade
    sobre os defaults via `deep_merge`.

    Args:
        defaults_path: Caminho do arquivo base.
        local_path: Caminho opcional de overrides locais.

    Returns:
        Configuração final resolvida.
    """
    effective = _load_file(Path(defaults_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return effective
