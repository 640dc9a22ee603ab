# tests/core/pipeline/test_registry_unique_step_name.py
"""
Testes de unicidade de nomes no StepRegistry.

Os testes asseguram que:
- Steps com nomes distintos são aceitos e preservam ordem de registro
- nomes duplicados são rejeitados com DuplicateStepNameError
- nomes vazios são rejeitados

Invariantes:
    - O registry nunca contém dois Steps com o mesmo nome
    - A tentativa de duplicidade não corrompe o estado interno
"""

import pytest

try:
    from atlas_flow.core.pipeline.registry import DuplicateStepNameError, StepRegistry
except Exception as e:  # noqa: BLE001
    StepRegistry = None
    DuplicateStepNameError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing StepRegistry. Implement:\n"
            "- src/atlas_flow/core/pipeline/registry.py (StepRegistry, DuplicateStepNameError)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def load_cart():
    return {"cart": []}


def price():
    return {"total": 0}


def test_registry_rejects_duplicate_step_name():
    """
    Verifica que o registry rejeita nomes duplicados sem alterar o estado.

    O primeiro registro é preservado; o segundo levanta
    DuplicateStepNameError.
    """
    _require_imports()
    reg = StepRegistry()
    reg.add("cart.load", load_cart)
    with pytest.raises(DuplicateStepNameError):
        reg.add("cart.load", price)
    assert reg.get("cart.load") is load_cart
    assert reg.names() == ["cart.load"]


def test_registry_accepts_unique_names():
    _require_imports()
    reg = StepRegistry()
    reg.add("cart.load", load_cart)
    reg.add("cart.price", price)
    assert reg.names() == ["cart.load", "cart.price"]
    assert reg.list() == [load_cart, price]
    assert "cart.price" in reg
    assert "cart.missing" not in reg


@pytest.mark.parametrize("name", ["", "   ", None])
def test_registry_rejects_empty_names(name):
    _require_imports()
    with pytest.raises(ValueError):
        StepRegistry().add(name, load_cart)


def test_registry_get_unknown_raises_key_error():
    _require_imports()
    with pytest.raises(KeyError):
        StepRegistry().get("nope")
