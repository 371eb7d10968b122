from datetime import datetime

import pytest

from utilities.fechas import SIN_VALOR, serial_a_fecha


def test_serial_conocido():
    assert serial_a_fecha(45875) == "06/08/25"
    assert serial_a_fecha(45875.0) == "06/08/25"
    assert serial_a_fecha("45875") == "06/08/25"


def test_serial_con_fraccion_de_dia():
    assert serial_a_fecha(45875.75) == "06/08/25"


@pytest.mark.parametrize("texto", ["12/05/2024", "2024-05-12", "12/05/24"])
def test_texto_con_formato_de_fecha_se_devuelve_igual(texto):
    assert serial_a_fecha(texto) == texto


@pytest.mark.parametrize("valor", [None, "", "   ", "abc", 40000, 60000, 39999, 60001, 12, "-5"])
def test_valores_no_decodificables(valor):
    assert serial_a_fecha(valor) == SIN_VALOR


def test_limites_exclusivos():
    assert serial_a_fecha(40001) == "07/07/09"
    assert serial_a_fecha(59999) != SIN_VALOR


def test_datetime_del_lector():
    assert serial_a_fecha(datetime(2025, 8, 6, 10, 30)) == "06/08/25"
