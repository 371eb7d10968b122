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

from typing import Iterable, List, Mapping, Optional

from database.base_model import BaseCRUDModel
from database.models import CAMPOS_EXPEDIENTE, Expediente
from database.schemas import RegistroCanonico


class ExpedienteModel(BaseCRUDModel):
    """Modelo CRUD para los expedientes de todas las categorías."""
    model = Expediente

    @staticmethod
    def a_fila(registro: Mapping) -> dict:
        """Convierte un registro canónico en los kwargs del modelo SQLAlchemy.

        Los campos que la tabla no conoce se descartan.
        """
        fila = {campo: registro[campo] for campo in CAMPOS_EXPEDIENTE if registro.get(campo) is not None}
        fila["categoria"] = registro["categoria"]
        return fila

    @staticmethod
    def a_registro(expediente: Expediente) -> RegistroCanonico:
        """Convierte una fila de la tabla en un RegistroCanonico."""
        campos = {
            campo: getattr(expediente, campo)
            for campo in CAMPOS_EXPEDIENTE
            if getattr(expediente, campo) is not None
        }
        return RegistroCanonico(categoria=expediente.categoria, campos=campos)

    def insertar_lote(self, registros: Iterable[Mapping]) -> int:
        """Inserta un lote de expedientes en una sola transacción.

        Args:
            registros (Iterable[Mapping]): Registros canónicos.

        Returns:
            int: Cantidad de expedientes insertados.
        """
        return self.bulk_create([self.a_fila(r) for r in registros])

    def eliminar_todos(self) -> int:
        """Borra todos los expedientes. Operación destructiva."""
        return self.delete_all()

    def listar(self, categoria: str, filtro_abogado: Optional[str] = None) -> List[RegistroCanonico]:
        """Lista los expedientes de una categoría, los más recientes primero.

        Args:
            categoria (str): Categoría a listar.
            filtro_abogado (str, optional): Coincidencia parcial sobre el abogado.

        Returns:
            List[RegistroCanonico]: Expedientes encontrados.
        """
        or_fields = [("abogado", filtro_abogado)] if filtro_abogado else None
        filas = self.search(
            filters={"categoria": categoria},
            or_fields=or_fields,
            order_by=Expediente.actualizado_en.desc(),
        )
        return [self.a_registro(f) for f in filas]
