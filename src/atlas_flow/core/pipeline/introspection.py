"""
Introspector de chamáveis do Atlas Flow.

Este módulo transforma qualquer formato de Step chamável suportado em
duas informações usadas pelo engine:

    - o chamável concreto que será executado
    - a lista ordenada de parâmetros declarados por ele

Formatos suportados:
    - função livre, lambda, builtin, `functools.partial` ou método ligado
    - par `(receptor, "metodo")`, onde o receptor é instância ou classe
    - objeto com `__call__`
    - string `"pacote.modulo.funcao"`, `"pacote.modulo:funcao"` ou builtin (`"len"`)
    - string `"pacote.modulo.Classe::metodo"` (despacho estático)

Decisões arquiteturais:
    - A assinatura é obtida com `inspect.signature` sobre o chamável
      resolvido, de modo que métodos ligados já excluem `self`/`cls`
    - Parâmetros variádicos (`*args`, `**kwargs`) não fazem parte do
      contrato de binding e são descartados
    - Qualquer outro formato é violação de contrato (fatal)

Limites explícitos:
    - Não resolve valores de parâmetros
    - Não executa o chamável
    - Não reconhece Flows aninhados (responsabilidade do engine)
"""

from __future__ import annotations

import functools
import importlib
import inspect
from typing import Any, Callable, List

from atlas_flow.core.errors import unsupported_callable
from atlas_flow.core.exceptions import UnsupportedCallableError

from .step import is_nested_flow
from .types import CallableInfo, StepShape

STATIC_METHOD_SEPARATOR = "::"

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def _unsupported(invocable: Any, reason: str) -> UnsupportedCallableError:
    payload = unsupported_callable(received=type(invocable).__name__, reason=reason)
    return UnsupportedCallableError.from_payload(
        payload,
        message=f"Formato de Step não suportado ({type(invocable).__name__}): {reason}",
    )


def _is_bound_pair(invocable: Any) -> bool:
    return (
        isinstance(invocable, (tuple, list))
        and len(invocable) == 2
        and isinstance(invocable[1], str)
    )


def _import_object(path: str) -> Any:
    """Importa o objeto apontado por um caminho pontuado.

    Aceita `"modulo:atributo.aninhado"` e `"pacote.modulo.atributo"`. No
    segundo caso o prefixo importável mais longo é o módulo. Um nome
    sem ponto é procurado em `builtins`.
    """
    if ":" in path:
        module_name, _, attr_path = path.partition(":")
        module = importlib.import_module(module_name)
        attrs = attr_path.split(".") if attr_path else []
    elif "." not in path:
        module = importlib.import_module("builtins")
        attrs = [path]
    else:
        parts = path.split(".")
        module = None
        attrs = []
        for cut in range(len(parts) - 1, 0, -1):
            candidate = ".".join(parts[:cut])
            try:
                module = importlib.import_module(candidate)
            except ModuleNotFoundError as exc:
                # só tenta um prefixo menor se o próprio candidato não existe
                if exc.name and (candidate == exc.name or candidate.startswith(exc.name + ".")):
                    continue
                raise
            attrs = parts[cut:]
            break
        if module is None:
            raise ModuleNotFoundError(f"Nenhum módulo importável em '{path}'")

    obj = module
    for attr in attrs:
        obj = getattr(obj, attr)
    return obj


def _resolve_name(name: str) -> Callable[..., Any]:
    try:
        if STATIC_METHOD_SEPARATOR in name:
            class_path, _, method_name = name.partition(STATIC_METHOD_SEPARATOR)
            target = getattr(_import_object(class_path), method_name)
        else:
            target = _import_object(name)
    except (ImportError, AttributeError) as exc:
        raise _unsupported(name, f"não foi possível importar '{name}': {exc}") from exc

    if not callable(target):
        raise _unsupported(name, f"'{name}' não é chamável")
    return target


def resolve_callable(invocable: Any) -> Callable[..., Any]:
    """
    Retorna o chamável concreto que será executado para um Step.

    Strings são importadas, pares `(receptor, "metodo")` são resolvidos
    via `getattr` e qualquer outro chamável é retornado sem alteração.

    Raises:
        UnsupportedCallableError: Se o valor não pertencer a nenhum
            formato suportado, ou se a string/par não puder ser resolvido.
    """
    if isinstance(invocable, str):
        return _resolve_name(invocable)

    if _is_bound_pair(invocable):
        receiver, method_name = invocable
        try:
            target = getattr(receiver, method_name)
        except AttributeError as exc:
            raise _unsupported(invocable, f"método '{method_name}' inexistente") from exc
        if not callable(target):
            raise _unsupported(invocable, f"atributo '{method_name}' não é chamável")
        return target

    if callable(invocable):
        return invocable

    raise _unsupported(invocable, "valor não é chamável")


def classify_step(step: Any) -> StepShape:
    """Identifica o formato de um Step (inclui Flow aninhado)."""
    if is_nested_flow(step):
        return StepShape.NESTED_FLOW
    if isinstance(step, str):
        if STATIC_METHOD_SEPARATOR in step:
            return StepShape.STATIC_METHOD_NAME
        return StepShape.FUNCTION_NAME
    if _is_bound_pair(step):
        return StepShape.BOUND_PAIR
    if (
        inspect.isfunction(step)
        or inspect.ismethod(step)
        or inspect.isbuiltin(step)
        or isinstance(step, functools.partial)
    ):
        return StepShape.FUNCTION
    if callable(step):
        return StepShape.CALLABLE_OBJECT
    raise _unsupported(step, "valor não é chamável")


def parameters_of(invocable: Any) -> List[inspect.Parameter]:
    """
    Retorna os parâmetros declarados do chamável que será executado.

    A ordem é a ordem de declaração. Parâmetros variádicos são omitidos,
    assim como keywords já fixados por um `functools.partial`.

    Raises:
        UnsupportedCallableError: Se o formato não for suportado ou se a
            assinatura não puder ser inspecionada.
    """
    target = resolve_callable(invocable)
    try:
        signature = inspect.signature(target)
    except (TypeError, ValueError) as exc:
        raise _unsupported(invocable, f"assinatura não inspecionável: {exc}") from exc

    # keywords já fixados por um partial não entram no binding
    bound = set(target.keywords) if isinstance(target, functools.partial) else set()
    return [
        p
        for p in signature.parameters.values()
        if p.kind not in _VARIADIC and p.name not in bound
    ]


def parameter_names_of(invocable: Any) -> List[str]:
    """Retorna os nomes dos parâmetros declarados, em ordem de declaração."""
    return [p.name for p in parameters_of(invocable)]


def _code_owner(target: Any) -> Any:
    # partial -> função embrulhada; objeto/classe -> __call__/__init__
    while isinstance(target, functools.partial):
        target = target.func
    if inspect.isclass(target):
        return target.__init__
    if not (inspect.isfunction(target) or inspect.ismethod(target) or inspect.isbuiltin(target)):
        return type(target).__call__
    return target


def describe_callable(invocable: Any) -> CallableInfo:
    """
    Descreve identidade e localização de código de um Step.

    Usado nas mensagens de violação de contrato. Chamáveis sem código
    Python (builtins) recebem arquivo `<unknown>` e linha 0.
    """
    target = resolve_callable(invocable)
    named = target
    while isinstance(named, functools.partial):
        named = named.func
    owner = inspect.unwrap(_code_owner(target))
    name = getattr(named, "__qualname__", None) or type(named).__qualname__
    code = getattr(owner, "__code__", None)
    if code is None:
        return CallableInfo(name=name, filename="<unknown>", lineno=0)
    return CallableInfo(name=name, filename=code.co_filename, lineno=code.co_firstlineno)
