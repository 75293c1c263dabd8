"""
Pydantic v2 schemas for the registry ("cadastros") modules.

Each business entity declares one ``*Create`` model by hand; the partial
``*Update`` model (every field optional) and the ``*Response`` model
(ORM-mode, with ``id`` and timestamps) are derived from it so the three
shapes never drift apart.

Monetary and measured values are ``float`` on the wire; SQLAlchemy
``Numeric`` columns hand back ``Decimal``, which Pydantic coerces.
"""

from __future__ import annotations

import datetime
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, create_model, field_validator

from app.utils.constants import (
    ADVANCE_STATUS,
    BILL_STATUS,
    CALIBRATION_STATUS,
    CONTRACT_STATUS,
    EMPLOYEE_STATUS,
    EQUIPMENT_STATUS,
    INFRASTRUCTURE_STATUS,
    INVOICE_STATUS,
    ISSUE_PRIORITY,
    ISSUE_STATUS,
    SEAL_STATUS,
    SERVICE_CALL_STATUS,
    VEHICLE_STATUS,
)


def _one_of(value: Any, allowed: list[str], field: str) -> Any:
    if value is not None and value not in allowed:
        raise ValueError(f"{field} '{value}' inválido. Valores válidos: {allowed}.")
    return value


class _OrmResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)


def _partial(model: type[BaseModel], name: str) -> type[BaseModel]:
    """Copy *model* with every field optional and defaulting to ``None``.

    Field constraints and validators are kept; validators already skip
    ``None``.
    """
    fields: dict[str, Any] = {}
    for field_name, info in model.model_fields.items():
        annotation: Any = Optional[info.annotation]
        if info.metadata:
            annotation = Annotated[(annotation, *info.metadata)]
        fields[field_name] = (annotation, Field(default=None, description=info.description))
    return create_model(name, __base__=model, **fields)


def _response(model: type[BaseModel], name: str) -> type[BaseModel]:
    """ORM-mode read model: every field of *model* plus ``id`` and timestamps."""
    fields: dict[str, Any] = {
        field_name: (Optional[info.annotation], None)
        for field_name, info in model.model_fields.items()
    }
    fields["id"] = (int, ...)
    fields["created_at"] = (Optional[datetime.datetime], None)
    fields["updated_at"] = (Optional[datetime.datetime], None)
    return create_model(name, __base__=_OrmResponse, **fields)


# ---------------------------------------------------------------------------
# Contracts
# ---------------------------------------------------------------------------


class ContractCreate(BaseModel):
    """Payload for ``POST /api/cadastros/contratos``.

    Attributes:
        number: Contract number as printed on the signed document.
        client_name: Contracting party.
        value: Total contract value (BRL).
        end_date: Original end of validity; amendments may extend it.
        status: One of ``constants.CONTRACT_STATUS``.
    """

    number: str = Field(..., min_length=1, max_length=50, description="Número do contrato.")
    client_name: str = Field(..., min_length=1, max_length=300, description="Cliente.")
    description: str | None = Field(default=None, description="Objeto do contrato.")
    value: float | None = Field(default=None, ge=0, description="Valor total (R$).")
    start_date: datetime.date | None = Field(default=None, description="Início da vigência.")
    end_date: datetime.date | None = Field(default=None, description="Fim da vigência.")
    state: str | None = Field(default=None, max_length=50, description="UF.")
    city: str | None = Field(default=None, max_length=150, description="Cidade.")
    cost_center: str | None = Field(default=None, max_length=50, description="Centro de custo.")
    status: str = Field(default="active", description=f"Status: {CONTRACT_STATUS}.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "number": "045/2023",
                "client_name": "Prefeitura de Campinas",
                "value": 1250000.00,
                "start_date": "2023-03-01",
                "end_date": "2026-02-28",
                "state": "SP",
                "city": "Campinas",
                "status": "active",
            }
        }
    )

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: str | None) -> str | None:
        return _one_of(value, CONTRACT_STATUS, "status")


class ContractAmendmentCreate(BaseModel):
    """Amendment ("aditivo") of a contract."""

    contract_id: int = Field(..., ge=1, description="ID do contrato.")
    amendment_number: int = Field(..., ge=1, description="Número sequencial do aditivo.")
    start_date: datetime.date | None = None
    end_date: datetime.date | None = Field(default=None, description="Nova data de término.")
    value: float | None = Field(default=None, ge=0)
    description: str | None = None


# ---------------------------------------------------------------------------
# People
# ---------------------------------------------------------------------------


class EmployeeCreate(BaseModel):
    """Payload for ``POST /api/cadastros/funcionarios``."""

    full_name: str = Field(..., min_length=1, max_length=300, description="Nome completo.")
    cpf: str | None = Field(default=None, max_length=20, description="CPF.")
    rg: str | None = Field(default=None, max_length=30)
    email: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=30)
    role: str | None = Field(default=None, max_length=100, description="Cargo.")
    department: str | None = Field(default=None, max_length=100, description="Departamento.")
    address: str | None = Field(default=None, max_length=500)
    city: str | None = Field(default=None, max_length=150)
    state: str | None = Field(default=None, max_length=50)
    admission_date: datetime.date | None = None
    termination_date: datetime.date | None = None
    salary: float | None = Field(default=None, ge=0)
    status: str = Field(default="active", description=f"Status: {EMPLOYEE_STATUS}.")
    contract_id: int | None = Field(default=None, ge=1)

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: str | None) -> str | None:
        return _one_of(value, EMPLOYEE_STATUS, "status")


class AdvanceCreate(BaseModel):
    """Salary advance ("adiantamento") paid to an employee."""

    employee_id: int = Field(..., ge=1)
    date: datetime.date
    value: float = Field(..., gt=0, description="Valor (R$).")
    reason: str | None = None
    status: str = Field(default="pending", description=f"Status: {ADVANCE_STATUS}.")

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: str | None) -> str | None:
        return _one_of(value, ADVANCE_STATUS, "status")


# ---------------------------------------------------------------------------
# Fleet
# ---------------------------------------------------------------------------


class VehicleCreate(BaseModel):
    """Payload for ``POST /api/cadastros/veiculos``."""

    plate: str = Field(..., min_length=1, max_length=10, description="Placa.")
    brand: str | None = Field(default=None, max_length=100)
    model: str | None = Field(default=None, max_length=100)
    year: int | None = Field(default=None, ge=1950, le=2100)
    color: str | None = Field(default=None, max_length=50)
    renavam: str | None = Field(default=None, max_length=20)
    chassis: str | None = Field(default=None, max_length=30)
    fuel_card: str | None = Field(default=None, max_length=50, description="Cartão combustível.")
    fuel_type: str | None = Field(default=None, max_length=30)
    current_km: int | None = Field(default=None, ge=0)
    status: str = Field(default="active", description=f"Status: {VEHICLE_STATUS}.")
    contract_id: int | None = Field(default=None, ge=1)

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: str | None) -> str | None:
        return _one_of(value, VEHICLE_STATUS, "status")


class FuelRecordCreate(BaseModel):
    vehicle_id: int = Field(..., ge=1)
    date: datetime.date
    liters: float = Field(..., gt=0)
    price_per_liter: float | None = Field(default=None, ge=0)
    total_value: float | None = Field(default=None, ge=0)
    odometer: int | None = Field(default=None, ge=0)
    fuel_type: str | None = Field(default=None, max_length=30)
    station: str | None = Field(default=None, max_length=200)


class MaintenanceRecordCreate(BaseModel):
    vehicle_id: int = Field(..., ge=1)
    date: datetime.date
    type: str = Field(..., min_length=1, max_length=50, description="Preventiva, corretiva …")
    description: str | None = None
    cost: float | None = Field(default=None, ge=0)
    odometer: int | None = Field(default=None, ge=0)
    workshop: str | None = Field(default=None, max_length=200)


class MileageRecordCreate(BaseModel):
    """Daily odometer entry; ``final_km`` must not be lower than ``initial_km``."""

    vehicle_id: int = Field(..., ge=1)
    employee_id: int | None = Field(default=None, ge=1)
    date: datetime.date
    initial_km: int = Field(..., ge=0)
    final_km: int = Field(..., ge=0)
    notes: str | None = None

    @field_validator("final_km")
    @classmethod
    def _check_final_km(cls, value: int | None, info: Any) -> int | None:
        initial = info.data.get("initial_km")
        if value is not None and initial is not None and value < initial:
            raise ValueError("Km final não pode ser menor que o km inicial.")
        return value


class TollTagCreate(BaseModel):
    vehicle_id: int | None = Field(default=None, ge=1)
    contract_id: int | None = Field(default=None, ge=1)
    tag_number: str = Field(..., min_length=1, max_length=50)
    passage_date: datetime.datetime
    value: float = Field(..., ge=0)
    toll_plaza: str | None = Field(default=None, max_length=200)


# ---------------------------------------------------------------------------
# Equipment
# ---------------------------------------------------------------------------


class EquipmentCreate(BaseModel):
    """Payload for ``POST /api/cadastros/equipamentos``."""

    serial_number: str = Field(..., min_length=1, max_length=100, description="Número de série.")
    type: str | None = Field(default=None, max_length=100)
    brand: str | None = Field(default=None, max_length=100)
    model: str | None = Field(default=None, max_length=100)
    address: str | None = Field(default=None, max_length=500)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    installation_date: datetime.date | None = None
    speed_limit: int | None = Field(default=None, ge=0)
    lanes_qty: int | None = Field(default=None, ge=0)
    status: str = Field(default="active", description=f"Status: {EQUIPMENT_STATUS}.")
    contract_id: int | None = Field(default=None, ge=1)

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: str | None) -> str | None:
        return _one_of(value, EQUIPMENT_STATUS, "status")


class CalibrationCreate(BaseModel):
    equipment_id: int = Field(..., ge=1)
    calibration_date: datetime.date
    expiration_date: datetime.date
    certificate_number: str | None = Field(default=None, max_length=100)
    inmetro_number: str | None = Field(default=None, max_length=100)
    status: str = Field(default="valid", description=f"Status: {CALIBRATION_STATUS}.")

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: str | None) -> str | None:
        return _one_of(value, CALIBRATION_STATUS, "status")


class SealCreate(BaseModel):
    seal_number: str = Field(..., min_length=1, max_length=50)
    seal_type: str | None = Field(default=None, max_length=50)
    received_date: datetime.date
    installation_date: datetime.date | None = None
    memo_number: str | None = Field(default=None, max_length=50)
    service_order: str | None = Field(default=None, max_length=50)
    equipment_id: int | None = Field(default=None, ge=1)
    technician_id: int | None = Field(default=None, ge=1)
    status: str = Field(default="available", description=f"Status: {SEAL_STATUS}.")
    notes: str | None = None

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: str | None) -> str | None:
        return _one_of(value, SEAL_STATUS, "status")


class InventoryItemCreate(BaseModel):
    component_name: str = Field(..., min_length=1, max_length=300)
    sku: str | None = Field(default=None, max_length=50)
    category: str | None = Field(default=None, max_length=100)
    quantity: int | None = Field(default=0, ge=0)
    min_quantity: int | None = Field(default=None, ge=0, description="Ponto de reposição.")
    unit_price: float | None = Field(default=None, ge=0)
    location: str | None = Field(default=None, max_length=200)


class InfractionCreate(BaseModel):
    equipment_id: int = Field(..., ge=1)
    contract_id: int | None = Field(default=None, ge=1)
    date: datetime.datetime | None = None
    month: str | None = Field(default=None, max_length=20, description="Mês como na planilha.")
    year: int | None = Field(default=None, ge=2000, le=2100)
    datacheck_lane: str | None = Field(default=None, max_length=20)
    physical_lane: str | None = Field(default=None, max_length=20)
    image_count: int = Field(default=0, ge=0)


class ImageMetricCreate(BaseModel):
    equipment_id: int = Field(..., ge=1)
    date: datetime.date
    total_captures: int | None = Field(default=None, ge=0)
    valid_captures: int | None = Field(default=None, ge=0)
    utilization_rate: float | None = Field(default=None, ge=0, le=100, description="Em %.")


# ---------------------------------------------------------------------------
# Utilities (energy / internet)
# ---------------------------------------------------------------------------


class EnergyConsumerUnitCreate(BaseModel):
    consumer_unit: str = Field(..., min_length=1, max_length=50, description="Código da UC.")
    address: str | None = Field(default=None, max_length=500)
    contract_id: int | None = Field(default=None, ge=1)


class EnergyBillCreate(BaseModel):
    consumer_unit: str = Field(..., min_length=1, max_length=50)
    reference_month: datetime.date = Field(..., description="Primeiro dia do mês de referência.")
    consumption_kwh: float | None = Field(default=None, ge=0)
    value: float | None = Field(default=None, ge=0)
    due_date: datetime.date | None = None
    status: str = Field(default="pending", description=f"Status: {BILL_STATUS}.")
    zero_invoice: bool = False
    contract_id: int | None = Field(default=None, ge=1)

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: str | None) -> str | None:
        return _one_of(value, BILL_STATUS, "status")


class InternetConnectionCreate(BaseModel):
    serial_number: str = Field(..., min_length=1, max_length=100)
    provider: str | None = Field(default=None, max_length=150)
    plan: str | None = Field(default=None, max_length=150)
    contract_id: int | None = Field(default=None, ge=1)


class InternetBillCreate(BaseModel):
    provider: str = Field(..., min_length=1, max_length=150)
    connection_id: int | None = Field(default=None, ge=1)
    reference_month: datetime.date
    value: float | None = Field(default=None, ge=0)
    due_date: datetime.date | None = None
    status: str = Field(default="pending", description=f"Status: {BILL_STATUS}.")
    contract_id: int | None = Field(default=None, ge=1)

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: str | None) -> str | None:
        return _one_of(value, BILL_STATUS, "status")


# ---------------------------------------------------------------------------
# Billing and quality
# ---------------------------------------------------------------------------


class InvoiceCreate(BaseModel):
    """Payload for ``POST /api/cadastros/faturas``."""

    contract_id: int | None = Field(default=None, ge=1)
    number: str = Field(..., min_length=1, max_length=50, description="Número da fatura.")
    issue_date: datetime.date
    due_date: datetime.date | None = None
    value: float = Field(..., ge=0, description="Valor bruto (R$).")
    discount: float | None = Field(default=None, ge=0)
    monthly_value: float | None = Field(default=None, ge=0)
    payment_date: datetime.date | None = None
    status: str = Field(default="pending", description=f"Status: {INVOICE_STATUS}.")
    notes: str | None = None

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: str | None) -> str | None:
        return _one_of(value, INVOICE_STATUS, "status")


class SlaMetricCreate(BaseModel):
    contract_id: int | None = Field(default=None, ge=1)
    month: datetime.date
    availability: float | None = Field(default=None, ge=0, le=100, description="Disponibilidade (%).")
    response_time: float | None = Field(default=None, ge=0, description="Horas.")
    resolution_time: float | None = Field(default=None, ge=0, description="Horas.")
    target_met: bool = False


class CustomerSatisfactionCreate(BaseModel):
    contract_id: int | None = Field(default=None, ge=1)
    quarter: str = Field(..., pattern=r"^Q[1-4]$", description="Trimestre: Q1 a Q4.")
    year: int = Field(..., ge=2000, le=2100)
    score: float | None = Field(default=None, ge=0, le=10)
    feedback: str | None = None


class InfrastructureServiceCreate(BaseModel):
    serial_number: str = Field(..., min_length=1, max_length=100)
    municipality: str = Field(..., min_length=1, max_length=150)
    date: datetime.datetime
    service_type: str = Field(..., min_length=1, max_length=100)
    status: str = Field(default="scheduled", description=f"Status: {INFRASTRUCTURE_STATUS}.")
    notes: str | None = None
    contract_id: int | None = Field(default=None, ge=1)

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: str | None) -> str | None:
        return _one_of(value, INFRASTRUCTURE_STATUS, "status")


class ServiceCallCreate(BaseModel):
    date: datetime.date
    type: str | None = Field(default=None, max_length=100)
    description: str | None = None
    resolution: str | None = None
    mob_code: str | None = Field(default=None, max_length=50)
    status: str = Field(default="open", description=f"Status: {SERVICE_CALL_STATUS}.")
    contract_id: int | None = Field(default=None, ge=1)
    equipment_id: int | None = Field(default=None, ge=1)
    employee_id: int | None = Field(default=None, ge=1)

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: str | None) -> str | None:
        return _one_of(value, SERVICE_CALL_STATUS, "status")


class ServiceGoalCreate(BaseModel):
    contract_id: int = Field(..., ge=1)
    month: datetime.date = Field(..., description="Primeiro dia do mês.")
    target_calls: int | None = Field(default=None, ge=0)
    completed_calls: int | None = Field(default=None, ge=0)
    percentage: float | None = Field(default=None, ge=0)


class PendingIssueCreate(BaseModel):
    """Kanban card ("pendência")."""

    title: str = Field(..., min_length=1, max_length=300)
    description: str | None = None
    type: str | None = Field(default=None, max_length=50)
    priority: str = Field(default="medium", description=f"Prioridade: {ISSUE_PRIORITY}.")
    status: str = Field(default="open", description=f"Status: {ISSUE_STATUS}.")
    column_key: str = Field(default="backlog", max_length=50)
    address: str | None = Field(default=None, max_length=500)
    due_date: datetime.date | None = None
    assigned_to: str | None = Field(default=None, max_length=200)
    contract_id: int | None = Field(default=None, ge=1)
    equipment_id: int | None = Field(default=None, ge=1)
    vehicle_id: int | None = Field(default=None, ge=1)

    @field_validator("priority")
    @classmethod
    def _check_priority(cls, value: str | None) -> str | None:
        return _one_of(value, ISSUE_PRIORITY, "priority")

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: str | None) -> str | None:
        return _one_of(value, ISSUE_STATUS, "status")


# ---------------------------------------------------------------------------
# Derived update / response models
# ---------------------------------------------------------------------------

ContractUpdate = _partial(ContractCreate, "ContractUpdate")
ContractResponse = _response(ContractCreate, "ContractResponse")
ContractAmendmentUpdate = _partial(ContractAmendmentCreate, "ContractAmendmentUpdate")
ContractAmendmentResponse = _response(ContractAmendmentCreate, "ContractAmendmentResponse")
EmployeeUpdate = _partial(EmployeeCreate, "EmployeeUpdate")
EmployeeResponse = _response(EmployeeCreate, "EmployeeResponse")
AdvanceUpdate = _partial(AdvanceCreate, "AdvanceUpdate")
AdvanceResponse = _response(AdvanceCreate, "AdvanceResponse")
VehicleUpdate = _partial(VehicleCreate, "VehicleUpdate")
VehicleResponse = _response(VehicleCreate, "VehicleResponse")
FuelRecordUpdate = _partial(FuelRecordCreate, "FuelRecordUpdate")
FuelRecordResponse = _response(FuelRecordCreate, "FuelRecordResponse")
MaintenanceRecordUpdate = _partial(MaintenanceRecordCreate, "MaintenanceRecordUpdate")
MaintenanceRecordResponse = _response(MaintenanceRecordCreate, "MaintenanceRecordResponse")
MileageRecordUpdate = _partial(MileageRecordCreate, "MileageRecordUpdate")
MileageRecordResponse = _response(MileageRecordCreate, "MileageRecordResponse")
TollTagUpdate = _partial(TollTagCreate, "TollTagUpdate")
TollTagResponse = _response(TollTagCreate, "TollTagResponse")
EquipmentUpdate = _partial(EquipmentCreate, "EquipmentUpdate")
EquipmentResponse = _response(EquipmentCreate, "EquipmentResponse")
CalibrationUpdate = _partial(CalibrationCreate, "CalibrationUpdate")
CalibrationResponse = _response(CalibrationCreate, "CalibrationResponse")
SealUpdate = _partial(SealCreate, "SealUpdate")
SealResponse = _response(SealCreate, "SealResponse")
InventoryItemUpdate = _partial(InventoryItemCreate, "InventoryItemUpdate")
InventoryItemResponse = _response(InventoryItemCreate, "InventoryItemResponse")
InfractionUpdate = _partial(InfractionCreate, "InfractionUpdate")
InfractionResponse = _response(InfractionCreate, "InfractionResponse")
ImageMetricUpdate = _partial(ImageMetricCreate, "ImageMetricUpdate")
ImageMetricResponse = _response(ImageMetricCreate, "ImageMetricResponse")
EnergyConsumerUnitUpdate = _partial(EnergyConsumerUnitCreate, "EnergyConsumerUnitUpdate")
EnergyConsumerUnitResponse = _response(EnergyConsumerUnitCreate, "EnergyConsumerUnitResponse")
EnergyBillUpdate = _partial(EnergyBillCreate, "EnergyBillUpdate")
EnergyBillResponse = _response(EnergyBillCreate, "EnergyBillResponse")
InternetConnectionUpdate = _partial(InternetConnectionCreate, "InternetConnectionUpdate")
InternetConnectionResponse = _response(InternetConnectionCreate, "InternetConnectionResponse")
InternetBillUpdate = _partial(InternetBillCreate, "InternetBillUpdate")
InternetBillResponse = _response(InternetBillCreate, "InternetBillResponse")
InvoiceUpdate = _partial(InvoiceCreate, "InvoiceUpdate")
InvoiceResponse = _response(InvoiceCreate, "InvoiceResponse")
SlaMetricUpdate = _partial(SlaMetricCreate, "SlaMetricUpdate")
SlaMetricResponse = _response(SlaMetricCreate, "SlaMetricResponse")
CustomerSatisfactionUpdate = _partial(CustomerSatisfactionCreate, "CustomerSatisfactionUpdate")
CustomerSatisfactionResponse = _response(CustomerSatisfactionCreate, "CustomerSatisfactionResponse")
InfrastructureServiceUpdate = _partial(InfrastructureServiceCreate, "InfrastructureServiceUpdate")
InfrastructureServiceResponse = _response(
    InfrastructureServiceCreate, "InfrastructureServiceResponse"
)
ServiceCallUpdate = _partial(ServiceCallCreate, "ServiceCallUpdate")
ServiceCallResponse = _response(ServiceCallCreate, "ServiceCallResponse")
ServiceGoalUpdate = _partial(ServiceGoalCreate, "ServiceGoalUpdate")
ServiceGoalResponse = _response(ServiceGoalCreate, "ServiceGoalResponse")
PendingIssueUpdate = _partial(PendingIssueCreate, "PendingIssueUpdate")
PendingIssueResponse = _response(PendingIssueCreate, "PendingIssueResponse")


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


class DashboardBucket(BaseModel):
    """One slice of a dashboard distribution."""

    label: str = Field(..., description="Valor agrupado (ex. 'active').")
    quantidade: int = Field(..., ge=0)
    valor: float = Field(default=0.0, description="Soma da coluna de valor no grupo.")
    percentual: float = Field(..., ge=0, le=100, description="Participação na contagem (%).")


class DashboardResponse(BaseModel):
    """Aggregates for the header cards and charts of an entity page.

    Attributes:
        entidade: Entity slug.
        total: Row count after filters.
        valor_total: Sum of the entity's value column (0 when it has none).
        distribuicoes: Group-by column → buckets ordered by quantity.
    """

    entidade: str
    total: int = Field(..., ge=0)
    valor_total: float = 0.0
    distribuicoes: dict[str, list[DashboardBucket]] = Field(default_factory=dict)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "entidade": "contratos",
                "total": 12,
                "valor_total": 8450000.0,
                "distribuicoes": {
                    "status": [
                        {"label": "active", "quantidade": 9, "valor": 7100000.0, "percentual": 75.0},
                        {"label": "expired", "quantidade": 3, "valor": 1350000.0, "percentual": 25.0},
                    ]
                },
            }
        }
    )


class ExclusaoLoteRequest(BaseModel):
    """Body of ``POST /api/cadastros/{slug}/excluir-lote``."""

    ids: list[int] = Field(..., min_length=1, max_length=500, description="IDs a excluir.")
