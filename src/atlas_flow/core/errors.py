"""
Atlas Flow - Canonical Error Structures (v1)

Este módulo define o payload canônico de erro do Atlas Flow e o catálogo
estável de códigos usados pelo engine.

Erros do engine são violações de contrato ou de uso, nunca falhas de
Steps. Falhas levantadas pela lógica de um Step atravessam o engine sem
qualquer conversão e, portanto, não aparecem neste catálogo.

Um payload deve ser:

- explícito
- serializável
- acionável
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FlowErrorPayload:
    """
    Payload canônico de erro do Atlas Flow.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao desenvolvedor (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Contrato de Step
FLOW_INVALID_STEP_RESULT = "FLOW_INVALID_STEP_RESULT"
FLOW_UNSUPPORTED_CALLABLE = "FLOW_UNSUPPORTED_CALLABLE"

# Uso indevido do Flow
FLOW_STATE_ERROR = "FLOW_STATE_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def invalid_step_result(
    *,
    step: str,
    filename: str,
    lineno: int,
    result_type: str,
    hint: str = "Ajuste o Step para retornar um mapping (dict) ou None.",
) -> FlowErrorPayload:
    return FlowErrorPayload(
        type=FLOW_INVALID_STEP_RESULT,
        message="Step retornou um resultado de tipo inválido",
        details={
            "step": step,
            "filename": filename,
            "lineno": lineno,
            "result_type": result_type,
        },
        hint=hint,
    )


def unsupported_callable(
    *,
    received: str,
    reason: Optional[str] = None,
    hint: str = (
        "Use uma função, um par (objeto, 'metodo'), um objeto chamável, "
        "'modulo.funcao' ou 'modulo.Classe::metodo'."
    ),
) -> FlowErrorPayload:
    return FlowErrorPayload(
        type=FLOW_UNSUPPORTED_CALLABLE,
        message="Formato de Step não suportado",
        details={
            "received": received,
            "reason": reason,
        },
        hint=hint,
    )


def flow_state_error(
    *,
    operation: str,
    executing: bool,
    hint: Optional[str] = None,
) -> FlowErrorPayload:
    return FlowErrorPayload(
        type=FLOW_STATE_ERROR,
        message=f"Operação '{operation}' não permitida no estado atual do Flow",
        details={
            "operation": operation,
            "executing": executing,
        },
        hint=hint,
    )
