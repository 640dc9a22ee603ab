"""
Tipos canônicos do pipeline do Atlas Flow.

Este módulo define as estruturas e enums que padronizam a comunicação
entre o introspector de chamáveis e o engine.

Componentes principais:
    - StepShape    → enum dos formatos de Step reconhecidos
    - CallableInfo → identidade e localização de código de um Step

Princípios fundamentais:
    - Tipos são estáveis e serializáveis
    - Nenhuma lógica de execução vive neste módulo

Limites explícitos:
    - Não executa Steps
    - Não resolve chamáveis
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StepShape(str, Enum):
    """
    Formatos de Step reconhecidos pelo engine.

    Os valores são strings para facilitar serialização em eventos de
    rastreamento.

    Formatos definidos:
        - FUNCTION: função livre, lambda, builtin, partial ou método já ligado
        - BOUND_PAIR: par (receptor, "nome_do_metodo")
        - CALLABLE_OBJECT: objeto que implementa `__call__`
        - FUNCTION_NAME: string "modulo.funcao" ou "modulo:funcao"
        - STATIC_METHOD_NAME: string "modulo.Classe::metodo"
        - NESTED_FLOW: outro Flow (qualquer objeto com `invoke`)

    Invariantes:
        - Todo Step aceito pelo engine possui exatamente um formato
        - Apenas NESTED_FLOW dispensa binding de parâmetros
    """
    FUNCTION = "function"
    BOUND_PAIR = "bound_pair"
    CALLABLE_OBJECT = "callable_object"
    FUNCTION_NAME = "function_name"
    STATIC_METHOD_NAME = "static_method_name"
    NESTED_FLOW = "nested_flow"


@dataclass(frozen=True)
class CallableInfo:
    """Identidade de um Step para mensagens de erro: nome qualificado, arquivo e linha."""

    name: str
    filename: str
    lineno: int

    def location(self) -> str:
        return f"{self.filename}({self.lineno})"
