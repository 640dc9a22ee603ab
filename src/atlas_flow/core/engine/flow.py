"""
Engine de execução do Atlas Flow.

O `Flow` executa uma lista ordenada de Steps contra um único contexto
compartilhado (nome → valor). Para cada Step comum, os parâmetros
declarados são preenchidos pelo nome a partir do contexto, com fallback
para o `DefaultValueProvider`; o mapping retornado pelo Step é mesclado
de volta no contexto.

Estados:
    - ocioso     → `append_step`/`prepend_step` permitidos, `break_` proibido
    - executando → `break_` permitido, mutação da lista de Steps proibida

Ciclo de `invoke`:
    1. mescla os valores iniciais no contexto
    2. marca executando e limpa o sinal de break
    3. aplica cada Step em ordem; após cada aplicação verifica o break
    4. retorna uma cópia do contexto completo
    5. restaura o estado de execução anterior (inclusive em falha)

Decisões arquiteturais:
    - Falhas levantadas por Steps propagam sem captura, wrap ou log
    - Um retorno que não é None nem mapping é violação de contrato fatal
    - O parâmetro especial `this_flow` recebe o próprio Flow, mesmo que
      o contexto tenha uma chave com esse nome
    - Uma chave presente com valor None é diferente de chave ausente:
      apenas a ausência consulta o provider
    - O sinal de break não é limpo ao sair, apenas no próximo `invoke`
    - Um Flow aninhado tem o contexto substituído pelo do pai antes de
      cada aplicação; apenas o `invoke` direto mescla sobre o acumulado

Limites explícitos:
    - Não executa Steps em paralelo ou de forma assíncrona
    - Não recupera falhas de Steps
    - Não converte tipos de valores
    - Não persiste o contexto entre processos
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from atlas_flow.core.errors import flow_state_error, invalid_step_result
from atlas_flow.core.exceptions import FlowStateError, InvalidStepResultError
from atlas_flow.core.pipeline.defaults import DefaultValueProvider
from atlas_flow.core.pipeline.introspection import (
    classify_step,
    describe_callable,
    parameters_of,
    resolve_callable,
)
from atlas_flow.core.pipeline.step import NestedFlow, Step, is_nested_flow


# Nome do parâmetro que recebe o Flow em execução.
THIS_FLOW = "this_flow"

_NO_STEP = object()


class Flow:
    """Engine canônico do Atlas Flow (lista de Steps + contexto compartilhado)."""

    def __init__(
        self,
        steps: Iterable[Step] = (),
        *,
        name: str = "flow",
        default_value_provider: Optional[DefaultValueProvider] = None,
        trace: bool = False,
        this_flow_parameter: str = THIS_FLOW,
    ):
        self._steps: List[Step] = list(steps)
        self._executing: bool = False
        self._break_requested: bool = False
        self._values: Dict[str, Any] = {}
        self._default_value_provider = default_value_provider

        self.name = name
        self.trace = trace
        self.this_flow_parameter = this_flow_parameter
        self.events: List[Dict[str, Any]] = []

    def __repr__(self) -> str:
        return f"Flow(name={self.name!r}, steps={len(self._steps)})"

    # -----------------------------
    # Estado
    # -----------------------------
    @property
    def executing(self) -> bool:
        return self._executing

    @property
    def break_requested(self) -> bool:
        return self._break_requested

    @property
    def steps(self) -> Tuple[Step, ...]:
        return tuple(self._steps)

    @property
    def default_value_provider(self) -> Optional[DefaultValueProvider]:
        return self._default_value_provider

    @default_value_provider.setter
    def default_value_provider(self, provider: Optional[DefaultValueProvider]) -> None:
        self._default_value_provider = provider

    # -----------------------------
    # Lista de Steps
    # -----------------------------
    def append_step(self, step: Step) -> None:
        self._assert_not_executing("append_step")
        self._steps.append(step)

    def prepend_step(self, step: Step) -> None:
        self._assert_not_executing("prepend_step")
        self._steps.insert(0, step)

    # -----------------------------
    # Contexto
    # -----------------------------
    def get_values(self) -> Dict[str, Any]:
        return dict(self._values)

    def set_values(self, values: Mapping[str, Any]) -> None:
        self._values = dict(values)

    def merge_values(self, values: Optional[Mapping[str, Any]]) -> None:
        """Mescla `values` no contexto; valores novos vencem, None explícito incluído."""
        if values is None:
            return
        self._values.update(values)

    def get_value(self, name: str) -> Any:
        if name in self._values:
            return self._values[name]
        return self._get_default_value(name)

    def set_value(self, name: str, value: Any) -> None:
        self._values[name] = value

    def _get_default_value(self, name: str) -> Any:
        if self._default_value_provider is None:
            return None
        return self._default_value_provider.get_value(name)

    # -----------------------------
    # Execução
    # -----------------------------
    def break_(self) -> None:
        """Solicita o fim do loop após o Step corrente (apenas durante `invoke`)."""
        self._assert_executing("break_")
        self._break_requested = True

    @classmethod
    def call(cls, steps: Iterable[Step], values: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Cria um Flow com `steps` e o executa uma vez."""
        return cls(steps)(values)

    def __call__(self, values: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self.invoke(values)

    def invoke(self, values: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        # Flows aninhados e re-entrada: o estado anterior é restaurado na saída.
        was_executing = self._executing
        try:
            self.merge_values(values)
            self._executing = True
            self._break_requested = False
            self._trace("flow.invoke.start", steps=len(self._steps))
            for step in self._steps:
                self.apply_step(step)
                if self._break_requested:
                    self._trace("flow.break", step=step)
                    break
            self._trace("flow.invoke.end", values=len(self._values))
            return dict(self._values)
        finally:
            self._executing = was_executing

    def apply_step(self, step: Step) -> None:
        """
        Executa um único Step contra o contexto atual.

        Pode ser chamado fora de `invoke`; o resultado fica disponível via
        `get_values()`.

        Raises:
            InvalidStepResultError: Se o Step retornar algo que não seja
                None nem mapping.
            UnsupportedCallableError: Se o Step não for de um formato suportado.
        """
        if is_nested_flow(step):
            self._apply_nested_flow(step)
        else:
            self._apply_callable_step(step)

    def _apply_nested_flow(self, flow: NestedFlow) -> None:
        if isinstance(flow, Flow):
            # o sub-Flow parte do contexto atual do pai, sem sobras de execuções anteriores
            flow.set_values(self._values)
            result = flow.invoke()
        else:
            result = flow.invoke(dict(self._values))
        self._values = dict(result)
        self._trace("flow.step.applied", step=flow)

    def _apply_callable_step(self, step: Step) -> None:
        target = resolve_callable(step)
        args, kwargs = self._bind_arguments(parameters_of(target))
        result = target(*args, **kwargs)
        self._validate_result(step, result)
        self.merge_values(result)
        self._trace("flow.step.applied", step=step)

    def _bind_arguments(self, parameters: List[inspect.Parameter]) -> Tuple[List[Any], Dict[str, Any]]:
        args: List[Any] = []
        kwargs: Dict[str, Any] = {}
        for parameter in parameters:
            if parameter.name == self.this_flow_parameter:
                value = self
            else:
                value = self.get_value(parameter.name)

            if parameter.kind is inspect.Parameter.KEYWORD_ONLY:
                kwargs[parameter.name] = value
            else:
                args.append(value)
        return args, kwargs

    def _validate_result(self, step: Step, result: Any) -> None:
        if result is None or isinstance(result, Mapping):
            return

        info = describe_callable(step)
        result_type = type(result).__name__
        raise InvalidStepResultError.from_payload(
            invalid_step_result(
                step=info.name,
                filename=info.filename,
                lineno=info.lineno,
                result_type=result_type,
            ),
            message=(
                f"Step {info.name}, defined in {info.location()}, returned an invalid "
                f"result type: {result_type}. The result must be either a mapping or None."
            ),
        )

    # -----------------------------
    # Guardrails
    # -----------------------------
    def _assert_executing(self, operation: str) -> None:
        if not self._executing:
            raise FlowStateError.from_payload(
                flow_state_error(
                    operation=operation,
                    executing=False,
                    hint="Chame esta operação de dentro de um Step, via parâmetro this_flow.",
                ),
                message="This operation can only be performed while the Flow is being executed.",
            )

    def _assert_not_executing(self, operation: str) -> None:
        if self._executing:
            raise FlowStateError.from_payload(
                flow_state_error(
                    operation=operation,
                    executing=True,
                    hint="Monte a lista de Steps antes de chamar invoke().",
                ),
                message="This operation cannot be performed while the Flow is being executed.",
            )

    # -----------------------------
    # Logging
    # -----------------------------
    def log(self, *, level: str, message: str, **extra: Any) -> None:
        event = {
            "flow": self.name,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def _trace(self, message: str, *, step: Any = _NO_STEP, **extra: Any) -> None:
        # identidade/forma do Step só são calculadas com trace ligado
        if not self.trace:
            return
        if step is not _NO_STEP:
            extra["step"] = self._step_label(step)
            extra["shape"] = classify_step(step).value
        self.log(level="DEBUG", message=message, **extra)

    def _step_label(self, step: Step) -> str:
        if is_nested_flow(step):
            return str(getattr(step, "name", type(step).__qualname__))
        if isinstance(step, str):
            return step
        return describe_callable(step).name


def run(steps: Iterable[Step], values: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Fachada: cria um Flow com `steps`, executa uma vez e retorna o contexto final."""
    return Flow.call(steps, values)
