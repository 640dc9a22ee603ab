# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas Flow.

Este módulo define fixtures reutilizáveis que fornecem:
- fábricas de Steps determinísticos (append em lista, eco de valores)
- um serviço de lookup em memória com sinalização de "não encontrado"
- definições YAML de Flow semelhantes ao uso real

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Imports do core são realizados de forma lazy para melhorar a
      clareza de erros durante falhas
    - Steps dummy são funções comuns: o engine não exige herança

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica condicional complexa
"""

import pytest


# =====================================================
# Steps
# =====================================================

@pytest.fixture
def make_push():
    """
    Fixture factory de Steps que acrescentam um valor à lista `x`.

    O Step retornado lê `x` do contexto, acrescenta `value` e devolve
    `{"x": nova_lista}`. Encadear vários desses Steps torna a ordem de
    execução observável no contexto final.

    Invariantes:
        - Não muta a lista recebida (cria uma nova)
        - Sempre retorna um mapping

    Returns:
        Callable[[Any], Callable]: fábrica `make_push(value)`.
    """

    def _make(value):
        def push(x):
            return {"x": list(x or []) + [value]}

        return push

    return _make


@pytest.fixture
def recorder():
    """Lista compartilhada para Steps registrarem que foram chamados."""
    return []


# =====================================================
# Lookup service (container)
# =====================================================

class NotFoundInContainer(LookupError):
    """Sinal de chave inexistente do container em memória."""


class ContainerBroken(RuntimeError):
    """Falha do container que não significa "não encontrado"."""


@pytest.fixture
def memory_container():
    """
    Fixture que fornece um serviço de lookup em memória com `get(key)`.

    Comportamento:
        - chave registrada → valor
        - chave `"broken"` → `ContainerBroken` (falha real do serviço)
        - qualquer outra chave → `NotFoundInContainer` (subclasse de LookupError)

    O objeto expõe `requested` com as chaves consultadas, em ordem.
    """

    class _MemoryContainer:
        not_found_error = NotFoundInContainer
        broken_error = ContainerBroken

        def __init__(self, items):
            self._items = dict(items)
            self.requested = []

        def get(self, key):
            self.requested.append(key)
            if key == "broken":
                raise ContainerBroken("container indisponível")
            if key not in self._items:
                raise NotFoundInContainer(key)
            return self._items[key]

    return _MemoryContainer


# =====================================================
# Definições de Flow (YAML)
# =====================================================

@pytest.fixture
def project_like_flow_defaults_yaml() -> str:
    """
    YAML de definição de Flow (defaults) semelhante ao uso real.

    Usa Steps importáveis de `tests.fixtures.steps.sample_steps`, um
    nome registrado (`cart.load`) e um Flow aninhado.

    Returns:
        str: Conteúdo YAML da definição base.
    """
    return """\
flow:
  name: checkout
  trace: false
  defaults:
    rate: 0.5
    greeting: Hello
  steps:
    - cart.load
    - tests.fixtures.steps.sample_steps.Pricing::discount
    - flow:
        name: notify
        defaults:
          greeting: Olá
        steps:
          - tests.fixtures.steps.sample_steps:greet
"""


@pytest.fixture
def project_like_flow_local_yaml() -> str:
    """YAML local de override: liga trace e troca a taxa de desconto."""
    return """\
flow:
  trace: true
  defaults:
    rate: 0.25
"""
