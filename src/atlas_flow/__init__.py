"""
Atlas Flow - executor síncrono de pipelines com binding de parâmetros por nome.

Um Flow executa uma lista ordenada de Steps escritos de forma independente
contra um único contexto compartilhado (nome → valor). Cada Step declara
suas entradas como parâmetros comuns e devolve suas saídas como um
mapping; o Flow cuida do resto:

    >>> from atlas_flow import run
    >>> def total(price, qty):
    ...     return {"total": price * qty}
    >>> run([total], {"price": 2, "qty": 3})["total"]
    6

Princípios centrais:
    - A lógica de negócio não conhece o framework, apenas entradas e
      saídas nomeadas
    - A execução é síncrona, em ordem e determinística
    - Falhas de Steps nunca são capturadas pelo engine

Arquitetura em alto nível:
    - core.pipeline → contratos de Step, introspector e providers de default
    - core.engine   → Flow (execução) e builder (definições declarativas)
    - core.config   → carregamento YAML/JSON e deep-merge
"""

from .core.engine.builder import build_flow, load_flow
from .core.engine.flow import THIS_FLOW, Flow, run
from .core.exceptions import (
    FlowException,
    FlowStateError,
    InvalidStepResultError,
    UnsupportedCallableError,
)
from .core.pipeline.defaults import (
    ContainerAdapter,
    DefaultValueProvider,
    ProviderComposite,
    StaticValueProvider,
)
from .core.pipeline.introspection import parameter_names_of
from .core.pipeline.registry import StepRegistry

__all__ = [
    "THIS_FLOW",
    "ContainerAdapter",
    "DefaultValueProvider",
    "Flow",
    "FlowException",
    "FlowStateError",
    "InvalidStepResultError",
    "ProviderComposite",
    "StaticValueProvider",
    "StepRegistry",
    "UnsupportedCallableError",
    "build_flow",
    "load_flow",
    "parameter_names_of",
    "run",
]
