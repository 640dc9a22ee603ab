"""
# Pipeline Core - Atlas Flow

Contratos e peças de apoio usadas pelo engine.

## Componentes

- **types**: `StepShape`, `CallableInfo`
- **step**: `NestedFlow` (Protocol), alias `Step`, `is_nested_flow`
- **introspection**: `parameter_names_of`, `parameters_of`,
  `resolve_callable`, `describe_callable`, `classify_step`
- **defaults**: `DefaultValueProvider`, `ProviderComposite`,
  `ContainerAdapter`, `StaticValueProvider`
- **registry**: `StepRegistry`

## Limites Explícitos

- Não executa Steps (ver `core.engine.flow`)
"""
