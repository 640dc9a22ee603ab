"""
Atlas Flow - Canonical Exceptions (v1)

Este módulo define as exceções tipadas levantadas pelo próprio engine.

Objetivo:
- Separar violações de contrato e de uso (erros do engine) das falhas
  levantadas pela lógica dos Steps, que nunca são capturadas
- Permitir o mapeamento determinístico para FlowErrorPayload
- Evitar ValueError/RuntimeError genéricos em guardrails críticos

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`
- A mensagem é curta e humana
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from .errors import (
    FLOW_INVALID_STEP_RESULT,
    FLOW_STATE_ERROR,
    FLOW_UNSUPPORTED_CALLABLE,
    FlowErrorPayload,
)


@dataclass(eq=False)
class FlowException(Exception):
    """Base class para exceções internas do Atlas Flow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - `code` é o código estável do catálogo em `core.errors`
    """

    code: ClassVar[str] = "FLOW_ERROR"

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_payload(cls, payload: FlowErrorPayload, *, message: Optional[str] = None) -> "FlowException":
        """Cria a exceção a partir de um payload do catálogo.

        `message` substitui a mensagem genérica do payload quando o ponto
        de falha tem contexto mais específico (ex.: identidade do Step).
        """
        return cls(
            message=message or payload.message,
            details=dict(payload.details),
            hint=payload.hint,
        )

    def to_payload(self) -> FlowErrorPayload:
        return FlowErrorPayload(
            type=self.code,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )


# ---------------------------------------------------------------------------
# Contrato de Step
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class InvalidStepResultError(FlowException):
    """Step retornou algo que não é None nem mapping."""

    code: ClassVar[str] = FLOW_INVALID_STEP_RESULT


@dataclass(eq=False)
class UnsupportedCallableError(FlowException):
    """Valor recebido como Step não pertence a nenhum formato chamável suportado."""

    code: ClassVar[str] = FLOW_UNSUPPORTED_CALLABLE


# ---------------------------------------------------------------------------
# Uso indevido
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class FlowStateError(FlowException):
    """Operação chamada fora do estado permitido (executando / ocioso)."""

    code: ClassVar[str] = FLOW_STATE_ERROR
