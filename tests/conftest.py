import pytest

from chargefield.fieldlines import Charge, ElectricField, FieldLineTracer, quadrupole


@pytest.fixture
def charges():
    return quadrupole()


@pytest.fixture
def field(charges):
    return ElectricField(charges)


@pytest.fixture
def tracer(field):
    return FieldLineTracer(field)


@pytest.fixture
def single_charge_field():
    """One unit charge at the origin with a small constant, potential = 1000 / r."""
    return ElectricField([Charge(1.0, (0.0, 0.0))], k=1000.0)
