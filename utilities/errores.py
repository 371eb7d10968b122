#  Copyright (c) 2026 Fleer
#  Permission is hereby granted, free of charge, to any person obtaining a copy
#  of this software and associated documentation files (the "Software"), to deal
#  in the Software without restriction, including without limitation the rights
#  to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
#  copies of the Software, and to permit persons to whom the Software is
#  furnished to do so, subject to the following conditions:
#
#  The above copyright notice and this permission notice shall be included in all
#  copies or substantial portions of the Software.


class ConfiguracionInvalidaError(ValueError):
    """Se intentó aplicar una configuración del semáforo fuera de sus límites."""


class ErrorPersistencia(Exception):
    """Falla del almacén durante una importación.

    Informa cuántos registros quedaron confirmados antes de la falla para que
    un reintento sepa desde dónde continuar.

    Attributes:
        registros_confirmados (int): Registros guardados por los lotes previos.
        lote_fallido (int | None): Número (desde 1) del lote que falló; None si
            falló el borrado previo.
        total_lotes (int): Cantidad de lotes planificados.
        eliminacion_realizada (bool): True si el borrado total ya se ejecutó.
        resumen: ResumenImportacion parcial de la corrida.
    """

    def __init__(self, mensaje, registros_confirmados=0, lote_fallido=None, total_lotes=0,
                 eliminacion_realizada=False, resumen=None):
        super().__init__(mensaje)
        self.registros_confirmados = registros_confirmados
        self.lote_fallido = lote_fallido
        self.total_lotes = total_lotes
        self.eliminacion_realizada = eliminacion_realizada
        self.resumen = resumen
