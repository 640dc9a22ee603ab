"""
Camada de configuração do Atlas Flow.

Responsabilidades do pacote:
    - Carregamento de arquivos YAML/JSON (defaults + overrides locais)
    - Resolução da configuração final via deep-merge determinístico
    - Exceções tipadas de configuração e de definição de Flow

Limites explícitos:
    - Não constrói Flows (ver `atlas_flow.core.engine.builder`)
    - Não executa Steps
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidFlowDefinitionError,
    UnsupportedConfigFormatError,
)
from .loader import load_config
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidFlowDefinitionError",
    "UnsupportedConfigFormatError",
    "deep_merge",
    "load_config",
]
