"""
Construção de Flows a partir de definições declarativas.

Uma definição de Flow é um dicionário (tipicamente carregado de YAML via
`load_config`) com a chave raiz `flow`:

    flow:
      name: checkout
      trace: false
      this_flow_parameter: this_flow
      defaults:
        currency: BRL
      steps:
        - cart.load                      # nome registrado no StepRegistry
        - myapp.steps:price              # função importável
        - myapp.steps.Pricing::discount  # método estático
        - flow:                          # Flow aninhado
            name: payment
            steps:
              - myapp.payment:authorize

Política de resolução de Steps:
    - string registrada no `StepRegistry` → Step registrado
    - qualquer outra string → mantida como string e resolvida pelo
      introspector no momento da aplicação
    - `{flow: {...}}` → Flow aninhado construído recursivamente

Política de defaults:
    - cada Flow consulta primeiro seus próprios `defaults`, depois a
      cadeia herdada do Flow pai; o provider explícito informado ao
      builder fica no fim da cadeia da raiz
    - `trace` e `this_flow_parameter` são herdados quando omitidos

Limites explícitos:
    - Não importa Steps antecipadamente (erros de import surgem na aplicação)
    - Não executa o Flow
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from atlas_flow.core.config.errors import InvalidFlowDefinitionError
from atlas_flow.core.config.loader import PathLike, load_config
from atlas_flow.core.pipeline.defaults import (
    DefaultValueProvider,
    ProviderComposite,
    StaticValueProvider,
)
from atlas_flow.core.pipeline.registry import StepRegistry
from atlas_flow.core.pipeline.step import Step

from .flow import THIS_FLOW, Flow

FLOW_KEY = "flow"

_ALLOWED_KEYS = {"name", "trace", "this_flow_parameter", "defaults", "steps"}


def _chain(providers: List[DefaultValueProvider]) -> Optional[DefaultValueProvider]:
    if not providers:
        return None
    if len(providers) == 1:
        return providers[0]
    return ProviderComposite(providers)


def _expect_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise InvalidFlowDefinitionError(
            f"{where} deve ser um mapping, recebido: {type(value).__name__}"
        )
    return value


def _build_step(
    entry: Any,
    *,
    index: int,
    where: str,
    parent: Flow,
    inherited: List[DefaultValueProvider],
    registry: Optional[StepRegistry],
) -> Step:
    if isinstance(entry, str):
        if not entry.strip():
            raise InvalidFlowDefinitionError(f"{where} não pode ser uma string vazia")
        if registry is not None and entry in registry:
            return registry.get(entry)
        return entry

    if isinstance(entry, Mapping) and set(entry) == {FLOW_KEY}:
        return _build(
            _expect_mapping(entry[FLOW_KEY], f"{where}.{FLOW_KEY}"),
            where=f"{where}.{FLOW_KEY}",
            default_name=f"{parent.name}.{index}",
            trace=parent.trace,
            this_flow_parameter=parent.this_flow_parameter,
            inherited=inherited,
            registry=registry,
        )

    raise InvalidFlowDefinitionError(
        f"{where} deve ser uma string ou {{{FLOW_KEY}: {{...}}}}, recebido: {type(entry).__name__}"
    )


def _build(
    definition: Mapping[str, Any],
    *,
    where: str,
    default_name: str,
    trace: bool,
    this_flow_parameter: str,
    inherited: List[DefaultValueProvider],
    registry: Optional[StepRegistry],
) -> Flow:
    unknown = sorted(set(definition) - _ALLOWED_KEYS)
    if unknown:
        raise InvalidFlowDefinitionError(f"{where}: chaves desconhecidas {unknown}")

    defaults = definition.get("defaults") or {}
    _expect_mapping(defaults, f"{where}.defaults")

    providers: List[DefaultValueProvider] = []
    if defaults:
        providers.append(StaticValueProvider(defaults))
    providers.extend(inherited)

    flow = Flow(
        name=str(definition.get("name") or default_name),
        default_value_provider=_chain(providers),
        trace=bool(definition.get("trace", trace)),
        this_flow_parameter=str(definition.get("this_flow_parameter") or this_flow_parameter),
    )

    steps = definition.get("steps") or []
    if not isinstance(steps, list):
        raise InvalidFlowDefinitionError(
            f"{where}.steps deve ser uma lista, recebido: {type(steps).__name__}"
        )

    for index, entry in enumerate(steps):
        flow.append_step(
            _build_step(
                entry,
                index=index,
                where=f"{where}.steps[{index}]",
                parent=flow,
                inherited=providers,
                registry=registry,
            )
        )
    return flow


def build_flow(
    config: Mapping[str, Any],
    *,
    registry: Optional[StepRegistry] = None,
    default_value_provider: Optional[DefaultValueProvider] = None,
) -> Flow:
    """
    Constrói um Flow a partir de uma configuração com a chave raiz `flow`.

    Args:
        config: Configuração resolvida (ex.: retorno de `load_config`).
        registry: Catálogo opcional de Steps nomeados.
        default_value_provider: Provider consultado por último, depois
            dos `defaults` declarados (ex.: um `ContainerAdapter`).

    Returns:
        Flow pronto para `invoke`.

    Raises:
        InvalidFlowDefinitionError: Se a definição for estruturalmente inválida.
    """
    _expect_mapping(config, "config")
    if FLOW_KEY not in config:
        raise InvalidFlowDefinitionError(f"config deve conter a chave raiz '{FLOW_KEY}'")

    inherited: List[DefaultValueProvider] = []
    if default_value_provider is not None:
        inherited.append(default_value_provider)

    return _build(
        _expect_mapping(config[FLOW_KEY], FLOW_KEY),
        where=FLOW_KEY,
        default_name=FLOW_KEY,
        trace=False,
        this_flow_parameter=THIS_FLOW,
        inherited=inherited,
        registry=registry,
    )


def load_flow(
    defaults_path: PathLike,
    local_path: Optional[PathLike] = None,
    *,
    registry: Optional[StepRegistry] = None,
    default_value_provider: Optional[DefaultValueProvider] = None,
) -> Flow:
    """Carrega a definição via `load_config` e constrói o Flow."""
    config: Dict[str, Any] = load_config(defaults_path=defaults_path, local_path=local_path)
    return build_flow(config, registry=registry, default_value_provider=default_value_provider)
