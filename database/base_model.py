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

from contextlib import contextmanager

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from database.conexion import SessionLocal


class BaseCRUDModel:
    """Operaciones CRUD genéricas sobre un modelo SQLAlchemy.

    Cada método abre su propia sesión: lo que se confirma en una llamada no se
    deshace si falla la siguiente. Las subclases definen `model`.
    """

    model = None  # se define en la subclase

    def __init__(self, session_factory=None):
        """
        Args:
            session_factory (sessionmaker, optional): Fábrica de sesiones; por
                defecto la de `database.conexion`.
        """
        self._session_factory = session_factory or SessionLocal

    def _get_session(self):
        return self._session_factory()

    @contextmanager
    def _transaccion(self):
        """Sesión que confirma al salir y deshace ante un error de la base.

        Raises:
            SQLAlchemyError: Se propaga tras el rollback.
        """
        with self._get_session() as session:
            try:
                yield session
                session.commit()
            except SQLAlchemyError:
                session.rollback()
                raise

    # ----------------------------
    # LECTURA
    # ----------------------------
    def get_all(self):
        with self._get_session() as session:
            return session.query(self.model).all()

    def get_by_id(self, obj_id):
        """Devuelve el registro con esa clave primaria o None."""
        with self._get_session() as session:
            return session.get(self.model, obj_id)

    # ----------------------------
    # ESCRITURA
    # ----------------------------
    def create(self, data: dict):
        """Inserta un registro y lo devuelve con sus valores por defecto cargados."""
        with self._transaccion() as session:
            obj = self.model(**data)
            session.add(obj)
            session.flush()
            session.refresh(obj)
            # Fuera de la sesión para que el commit no expire sus atributos
            session.expunge(obj)
        return obj

    def update(self, obj_id, data: dict):
        """Modifica los campos indicados de un registro.

        Las claves que el modelo no tiene se ignoran.

        Returns:
            object | None: El registro actualizado, o None si no existe.
        """
        with self._transaccion() as session:
            obj = session.get(self.model, obj_id)
            if obj is None:
                return None
            for key, value in data.items():
                if hasattr(obj, key):
                    setattr(obj, key, value)
            session.flush()
            session.refresh(obj)
            session.expunge(obj)
        return obj

    def delete(self, obj_id) -> bool:
        """Elimina un registro. Devuelve False si no existía."""
        with self._transaccion() as session:
            obj = session.get(self.model, obj_id)
            if obj is None:
                return False
            session.delete(obj)
            return True

    def bulk_create(self, rows: list[dict]) -> int:
        """Inserta varios registros en una sola transacción (todos o ninguno).

        Args:
            rows (list[dict]): Datos de cada registro.

        Returns:
            int: Cantidad de registros insertados.

        Raises:
            SQLAlchemyError: Si la base de datos rechaza el lote.
        """
        if not rows:
            return 0
        with self._transaccion() as session:
            session.add_all([self.model(**data) for data in rows])
        return len(rows)

    def delete_all(self) -> int:
        """Vacía la tabla y devuelve cuántos registros se borraron."""
        with self._transaccion() as session:
            return session.query(self.model).delete(synchronize_session=False)

    # ----------------------------
    # CONSULTAS CON FILTROS
    # ----------------------------
    def _apply_filters(self, query, filters: dict | None = None, or_fields: list[tuple[str, str]] | None = None):
        """Aplica igualdades exactas (AND) y coincidencias parciales sin mayúsculas (OR).

        Los campos que el modelo no tiene y los valores None se ignoran.
        """
        for field, value in (filters or {}).items():
            if hasattr(self.model, field) and value is not None:
                query = query.filter(getattr(self.model, field) == value)

        condiciones = [
            getattr(self.model, field).ilike(f"%{value}%")
            for field, value in (or_fields or [])
            if hasattr(self.model, field)
        ]
        if condiciones:
            query = query.filter(or_(*condiciones))
        return query

    def count(self, filters: dict | None = None, or_fields: list[tuple[str, str]] | None = None) -> int:
        with self._get_session() as session:
            return self._apply_filters(session.query(self.model), filters, or_fields).count()

    def search(
        self,
        filters: dict | None = None,
        order_by=None,
        limit: int | None = None,
        offset: int | None = None,
        first: bool = False,
        or_fields: list[tuple[str, str]] | None = None
    ):
        """Búsqueda con filtros, orden y paginación.

        Args:
            filters (dict, optional): Igualdades exactas {campo: valor}.
            order_by (Column, optional): Criterio de ordenamiento.
            limit (int, optional): Máximo de resultados.
            offset (int, optional): Resultados a saltar.
            first (bool, optional): Si True devuelve solo el primero (o None).
            or_fields (list[tuple], optional): Coincidencias parciales [(campo, texto)].

        Returns:
            list | object: Resultados, o una instancia si first=True.
        """
        with self._get_session() as session:
            query = self._apply_filters(session.query(self.model), filters, or_fields)
            if order_by is not None:
                query = query.order_by(order_by)
            if offset is not None:
                query = query.offset(offset)
            if limit is not None:
                query = query.limit(limit)
            return query.first() if first else query.all()
