"""
Exceções da camada de configuração do Atlas Flow.

Cobrem carregamento de arquivos, deep-merge e validação estrutural de
definições de Flow. Todas herdam de `ConfigError`.

Limites explícitos:
    - Não representam falhas de Steps
    - Não realizam fallback ou recovery
"""


class ConfigError(Exception):
    """
    Exceção base para erros de configuração do Atlas Flow.

    Permite captura genérica de falhas de configuração, separada das
    exceções do engine (`FlowException`) e das falhas de Steps.
    """


class DefaultsNotFoundError(ConfigError):
    """O arquivo base (defaults) não existe no caminho informado."""


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do arquivo não é um dicionário."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo:
        - base:     {"flow": {"trace": false}}
        - override: {"flow": "checkout"}
    """


class InvalidFlowDefinitionError(ConfigError):
    """
    Definição de Flow estruturalmente inválida.

    A mensagem sempre inclui o caminho da entrada problemática
    (ex.: `flow.steps[2]`).
    """
