"""
Contrato canônico de Step do Atlas Flow.

Um Step é a menor unidade executável de um Flow. Existem duas variantes:

    - chamável comum: seus nomes de parâmetros declarados são o contrato
      de binding (ver `introspection`)
    - Flow aninhado: recebe o contexto inteiro, sem binding individual

Princípios fundamentais:
    - Steps não conhecem o engine, apenas entradas e saídas nomeadas
    - O Flow aninhado é reconhecido por duck typing (`invoke`), não por
      identidade de classe
    - Conformidade é verificada em runtime (@runtime_checkable)

Limites explícitos:
    - Não executa Steps
    - Não resolve parâmetros
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Mapping, Optional, Protocol, Tuple, Union, runtime_checkable


@runtime_checkable
class NestedFlow(Protocol):
    """
    Contrato estrutural de um Flow usado como Step de outro Flow.

    O Flow externo entrega o contexto atual completo em `invoke` e
    substitui seu contexto pelo mapping retornado.

    Invariantes:
        - `invoke` retorna o contexto final completo, não um delta
        - O retorno é uma cópia; o Flow externo pode mutá-lo livremente
    """

    def invoke(self, values: Optional[Mapping[str, Any]] = None) -> Mapping[str, Any]:
        ...


# Um Step é qualquer um dos formatos reconhecidos pelo introspector ou um Flow aninhado.
Step = Union[Callable[..., Any], Tuple[Any, str], str, NestedFlow]


def is_nested_flow(step: Any) -> bool:
    """Indica se o Step deve ser aplicado como Flow aninhado.

    Classes são excluídas: uma classe com método `invoke` ainda é um
    chamável comum (seu construtor).
    """
    return not inspect.isclass(step) and isinstance(step, NestedFlow)
