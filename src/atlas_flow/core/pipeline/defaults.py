"""
Resolução de valores default do Atlas Flow.

Quando um parâmetro de Step não existe no contexto do Flow, o engine
consulta um `DefaultValueProvider`. Este módulo define o protocolo e as
implementações canônicas.

Implementações:
    - ProviderComposite   → cadeia ordenada, primeiro valor não-None vence
    - ContainerAdapter    → adapta um serviço de lookup (`get(key)`), como
                            um container de injeção de dependências
    - StaticValueProvider → mapa fixo de defaults (ex.: seção `defaults`
                            de uma definição de Flow)

Decisões arquiteturais:
    - Providers são consultados apenas para chaves ausentes do contexto
    - `None` significa "sem valor": um provider que responde `None`
      explicitamente é indistinguível de um provider sem resposta
    - O único ponto em que uma falha é rebaixada para "sem valor" é o
      "não encontrado" do ContainerAdapter

Limites explícitos:
    - Não mantém estado além das dependências recebidas no construtor
    - Não converte tipos
    - Não implementa container de injeção de dependências
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Protocol, Tuple, Type, runtime_checkable


@runtime_checkable
class DefaultValueProvider(Protocol):
    """Fonte de valores para nomes ausentes do contexto."""

    def get_value(self, name: str) -> Any:
        """Retorna o valor associado a `name` ou None quando não houver."""
        ...


@runtime_checkable
class LookupService(Protocol):
    """Serviço de lookup por chave que sinaliza ausência com exceção."""

    def get(self, key: str) -> Any:
        ...


class ProviderComposite:
    """
    Cadeia ordenada de providers.

    Cada provider é consultado na ordem recebida; o primeiro que
    responder algo diferente de None vence. Lista vazia ou todas as
    respostas None resultam em None.

    Invariantes:
        - A ordem de consulta é exatamente a ordem de construção
        - Providers posteriores não são consultados após um acerto
    """

    def __init__(self, providers: Iterable[DefaultValueProvider]):
        self._providers: List[DefaultValueProvider] = list(providers)

    @property
    def providers(self) -> Tuple[DefaultValueProvider, ...]:
        return tuple(self._providers)

    def get_value(self, name: str) -> Any:
        for provider in self._providers:
            value = provider.get_value(name)
            if value is not None:
                return value
        return None


class ContainerAdapter:
    """
    Adapta um serviço de lookup (`get(key)`) ao protocolo de provider.

    As exceções listadas em `not_found` são a forma do serviço dizer
    "chave inexistente" e viram None. Por padrão é `LookupError`, que
    cobre `KeyError` e `IndexError`. Qualquer outra exceção propaga sem
    alteração.

    Atenção: com o padrão, um `KeyError` ou `IndexError` levantado dentro
    de uma factory do container também vira None, escondendo a falha.
    Informe em `not_found` apenas o tipo de "não encontrado" do serviço
    sempre que ele tiver um próprio.

    Args:
        container: Objeto com método `get(key)`.
        not_found: Tipos de exceção que significam "não encontrado".
    """

    def __init__(
        self,
        container: LookupService,
        not_found: Tuple[Type[BaseException], ...] = (LookupError,),
    ):
        self._container = container
        self._not_found = tuple(not_found)

    @property
    def container(self) -> LookupService:
        return self._container

    def get_value(self, name: str) -> Any:
        try:
            return self._container.get(name)
        except self._not_found:
            return None


class StaticValueProvider:
    """Provider sobre um mapa fixo; a cópia é feita na construção."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values = dict(values or {})

    def get_value(self, name: str) -> Any:
        return self._values.get(name)
