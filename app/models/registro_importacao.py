"""RegistroImportacao model — audit log of every spreadsheet imported into the system."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from app.database import Base


class RegistroImportacao(Base):
    """Persistent audit record created after each spreadsheet import attempt.

    One row is written per upload regardless of success or failure so that
    administrators can review what was imported, by whom, and when.

    Attributes:
        id: Primary key.
        entidade: Import configuration key, e.g. ``"contracts"``,
            ``"fuel_records"``.
        arquivo_nome: Original filename submitted by the client.
        arquivo_path: Stored copy relative to ``UPLOADS_DIR`` (``None`` when
            the copy could not be written).
        data: UTC timestamp when the import was processed.
        usuario_id: ID of the Usuario who performed the upload.
        usuario_username: Snapshot of the username at import time.
        total_linhas: Data rows read from the spreadsheet.
        registros_ok: Count of rows successfully persisted.
        registros_erro: Count of rows rejected during validation.
        status: Final import status — ``"SUCESSO"``, ``"PARCIAL"``
            or ``"FALHA"``.
        errors_json: JSON-serialised list of error messages.
    """

    __tablename__ = "registro_importacao"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entidade = Column(String(50), nullable=False)
    arquivo_nome = Column(String(500), nullable=False)
    arquivo_path = Column(String(500), nullable=True)
    data = Column(DateTime, default=func.now(), nullable=False)
    usuario_id = Column(Integer, nullable=False)
    usuario_username = Column(String(100), nullable=False)
    total_linhas = Column(Integer, default=0, nullable=False)
    registros_ok = Column(Integer, default=0, nullable=False)
    registros_erro = Column(Integer, default=0, nullable=False)
    status = Column(String(20), nullable=False)  # SUCESSO | PARCIAL | FALHA
    errors_json = Column(Text, nullable=True)
