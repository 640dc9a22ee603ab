"""
Registro nomeado de Steps.

Este módulo define o `StepRegistry`, catálogo que associa nomes estáveis
a Steps para que definições declarativas de Flow (YAML/JSON) possam
referenciá-los sem caminho de import.

Responsabilidades do módulo:
    - Validar nomes (string não vazia)
    - Garantir unicidade de nomes
    - Preservar ordem de registro

Decisões arquiteturais:
    - Duplicidade é erro fatal no momento do registro
    - O registry não valida o formato do Step (feito na aplicação)

Limites explícitos:
    - Não executa Steps
    - Não resolve strings de import
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .step import Step


class DuplicateStepNameError(ValueError):
    """
    Exceção levantada quando um nome de Step já está registrado.

    Invariantes:
        - O primeiro registro com um dado nome é preservado
        - Nenhum registro parcial ocorre após a detecção do erro
    """


@dataclass
class StepRegistry:
    """
    Catálogo canônico de Steps nomeados.

    Decisões arquiteturais:
        - A ordem de inserção é preservada separadamente
        - A estrutura interna não é exposta diretamente

    Invariantes:
        - Cada nome é único no registry
        - `names()` reflete exatamente a ordem de registro
    """

    _steps: Dict[str, Step] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, name: str, step: Step) -> None:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("step name must be a non-empty string")

        if name in self._steps:
            raise DuplicateStepNameError(f"Duplicate step name: {name}")

        self._steps[name] = step
        self._order.append(name)

    def get(self, name: str) -> Step:
        return self._steps[name]

    def names(self) -> List[str]:
        return list(self._order)

    def list(self) -> List[Step]:
        return [self._steps[name] for name in self._order]

    def __contains__(self, name: object) -> bool:
        return name in self._steps
