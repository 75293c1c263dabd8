"""
Entity registry for the generic registry ("cadastros") modules.

One ``EntityConfig`` per business entity tells the generic CRUD, dashboard,
export and dependency services everything they need: the ORM model, the
three Pydantic shapes, which columns are searchable, filterable, grouped
on the dashboard, summed, and exported.

Usage example::

    from app.services.entidades import get_entity_or_404

    config = get_entity_or_404("veiculos")
    rows = db.query(config.model).all()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fastapi import HTTPException, status
from pydantic import BaseModel

from app.models.advance import Advance
from app.models.calibration import Calibration
from app.models.contract import Contract, ContractAmendment
from app.models.customer_satisfaction import CustomerSatisfaction
from app.models.employee import Employee
from app.models.energy import EnergyBill, EnergyConsumerUnit
from app.models.equipment import Equipment
from app.models.fuel_record import FuelRecord
from app.models.image_metric import ImageMetric
from app.models.infraction import Infraction
from app.models.infrastructure_service import InfrastructureService
from app.models.internet import InternetBill, InternetConnection
from app.models.inventory import InventoryItem
from app.models.invoice import Invoice
from app.models.maintenance_record import MaintenanceRecord
from app.models.mileage_record import MileageRecord
from app.models.pending_issue import PendingIssue
from app.models.seal import Seal
from app.models.service_call import ServiceCall
from app.models.service_goal import ServiceGoal
from app.models.sla_metric import SlaMetric
from app.models.toll_tag import TollTag
from app.models.vehicle import Vehicle
from app.schemas import cadastros as s


@dataclass(frozen=True)
class EntityConfig:
    """Everything the generic services need to know about one entity.

    Attributes:
        slug: URL segment under ``/api/cadastros``.
        title: Portuguese title, used for export file names and headings.
        model: SQLAlchemy model class.
        create_schema: Payload model for ``POST``.
        update_schema: Partial payload model for ``PUT``.
        response_schema: ORM-mode read model.
        search_columns: Columns matched by ``?busca=`` (case-insensitive LIKE).
        filter_columns: Columns accepted as exact-match query filters.
        group_columns: Columns bucketed on the dashboard.
        sum_column: Column summed as ``valor`` on the dashboard, if any.
        export_columns: ``(attribute, header)`` pairs for Excel/PDF/CSV; a
            dotted attribute such as ``"vehicle.plate"`` follows a relationship.
        default_order: Column used to order list results (descending).
    """

    slug: str
    title: str
    model: Any
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    response_schema: type[BaseModel]
    search_columns: tuple[str, ...] = ()
    filter_columns: tuple[str, ...] = ()
    group_columns: tuple[str, ...] = ()
    sum_column: str | None = None
    export_columns: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    default_order: str = "id"

    @property
    def table_name(self) -> str:
        return self.model.__tablename__


_ENTITY_LIST: list[EntityConfig] = [
    EntityConfig(
        slug="contratos",
        title="Contratos",
        model=Contract,
        create_schema=s.ContractCreate,
        update_schema=s.ContractUpdate,
        response_schema=s.ContractResponse,
        search_columns=("number", "client_name", "city"),
        filter_columns=("status", "state", "city"),
        group_columns=("status", "state"),
        sum_column="value",
        export_columns=(
            ("number", "Número"),
            ("client_name", "Cliente"),
            ("value", "Valor"),
            ("start_date", "Início"),
            ("end_date", "Término"),
            ("city", "Cidade"),
            ("state", "UF"),
            ("status", "Status"),
        ),
        default_order="end_date",
    ),
    EntityConfig(
        slug="aditivos",
        title="Aditivos de Contrato",
        model=ContractAmendment,
        create_schema=s.ContractAmendmentCreate,
        update_schema=s.ContractAmendmentUpdate,
        response_schema=s.ContractAmendmentResponse,
        search_columns=("description",),
        filter_columns=("contract_id",),
        sum_column="value",
        export_columns=(
            ("contract.number", "Contrato"),
            ("amendment_number", "Aditivo"),
            ("start_date", "Início"),
            ("end_date", "Término"),
            ("value", "Valor"),
        ),
    ),
    EntityConfig(
        slug="funcionarios",
        title="Funcionários",
        model=Employee,
        create_schema=s.EmployeeCreate,
        update_schema=s.EmployeeUpdate,
        response_schema=s.EmployeeResponse,
        search_columns=("full_name", "cpf", "email", "role"),
        filter_columns=("status", "department", "contract_id"),
        group_columns=("status", "department"),
        sum_column="salary",
        export_columns=(
            ("full_name", "Nome"),
            ("cpf", "CPF"),
            ("role", "Cargo"),
            ("department", "Departamento"),
            ("admission_date", "Admissão"),
            ("status", "Status"),
        ),
        default_order="full_name",
    ),
    EntityConfig(
        slug="adiantamentos",
        title="Adiantamentos",
        model=Advance,
        create_schema=s.AdvanceCreate,
        update_schema=s.AdvanceUpdate,
        response_schema=s.AdvanceResponse,
        search_columns=("reason",),
        filter_columns=("status", "employee_id"),
        group_columns=("status",),
        sum_column="value",
        export_columns=(
            ("employee_id", "Funcionário"),
            ("date", "Data"),
            ("value", "Valor"),
            ("reason", "Motivo"),
            ("status", "Status"),
        ),
        default_order="date",
    ),
    EntityConfig(
        slug="veiculos",
        title="Veículos",
        model=Vehicle,
        create_schema=s.VehicleCreate,
        update_schema=s.VehicleUpdate,
        response_schema=s.VehicleResponse,
        search_columns=("plate", "brand", "model", "fuel_card"),
        filter_columns=("status", "brand", "contract_id"),
        group_columns=("status", "brand"),
        export_columns=(
            ("plate", "Placa"),
            ("brand", "Marca"),
            ("model", "Modelo"),
            ("year", "Ano"),
            ("current_km", "Km Atual"),
            ("status", "Status"),
        ),
        default_order="plate",
    ),
    EntityConfig(
        slug="abastecimentos",
        title="Abastecimentos",
        model=FuelRecord,
        create_schema=s.FuelRecordCreate,
        update_schema=s.FuelRecordUpdate,
        response_schema=s.FuelRecordResponse,
        search_columns=("station", "fuel_type"),
        filter_columns=("vehicle_id", "fuel_type"),
        group_columns=("fuel_type",),
        sum_column="total_value",
        export_columns=(
            ("vehicle.plate", "Veículo"),
            ("date", "Data"),
            ("liters", "Litros"),
            ("price_per_liter", "Preço/Litro"),
            ("total_value", "Valor Total"),
            ("station", "Posto"),
        ),
        default_order="date",
    ),
    EntityConfig(
        slug="manutencoes",
        title="Manutenções",
        model=MaintenanceRecord,
        create_schema=s.MaintenanceRecordCreate,
        update_schema=s.MaintenanceRecordUpdate,
        response_schema=s.MaintenanceRecordResponse,
        search_columns=("description", "workshop", "type"),
        filter_columns=("vehicle_id", "type"),
        group_columns=("type",),
        sum_column="cost",
        export_columns=(
            ("vehicle.plate", "Veículo"),
            ("date", "Data"),
            ("type", "Tipo"),
            ("cost", "Custo"),
            ("workshop", "Oficina"),
        ),
        default_order="date",
    ),
    EntityConfig(
        slug="quilometragem",
        title="Quilometragem",
        model=MileageRecord,
        create_schema=s.MileageRecordCreate,
        update_schema=s.MileageRecordUpdate,
        response_schema=s.MileageRecordResponse,
        search_columns=("notes",),
        filter_columns=("vehicle_id", "employee_id"),
        export_columns=(
            ("vehicle.plate", "Veículo"),
            ("date", "Data"),
            ("initial_km", "Km Inicial"),
            ("final_km", "Km Final"),
            ("notes", "Observações"),
        ),
        default_order="date",
    ),
    EntityConfig(
        slug="pedagios",
        title="Pedágios",
        model=TollTag,
        create_schema=s.TollTagCreate,
        update_schema=s.TollTagUpdate,
        response_schema=s.TollTagResponse,
        search_columns=("tag_number", "toll_plaza"),
        filter_columns=("vehicle_id", "contract_id"),
        group_columns=("toll_plaza",),
        sum_column="value",
        export_columns=(
            ("tag_number", "Tag"),
            ("vehicle_id", "Veículo"),
            ("passage_date", "Passagem"),
            ("toll_plaza", "Praça"),
            ("value", "Valor"),
        ),
        default_order="passage_date",
    ),
    EntityConfig(
        slug="equipamentos",
        title="Equipamentos",
        model=Equipment,
        create_schema=s.EquipmentCreate,
        update_schema=s.EquipmentUpdate,
        response_schema=s.EquipmentResponse,
        search_columns=("serial_number", "address", "model"),
        filter_columns=("status", "type", "contract_id"),
        group_columns=("status", "type"),
        export_columns=(
            ("serial_number", "Número de Série"),
            ("type", "Tipo"),
            ("brand", "Marca"),
            ("model", "Modelo"),
            ("address", "Endereço"),
            ("installation_date", "Instalação"),
            ("status", "Status"),
        ),
        default_order="serial_number",
    ),
    EntityConfig(
        slug="afericoes",
        title="Aferições",
        model=Calibration,
        create_schema=s.CalibrationCreate,
        update_schema=s.CalibrationUpdate,
        response_schema=s.CalibrationResponse,
        search_columns=("certificate_number", "inmetro_number"),
        filter_columns=("status", "equipment_id"),
        group_columns=("status",),
        export_columns=(
            ("equipment.serial_number", "Equipamento"),
            ("calibration_date", "Data da Aferição"),
            ("expiration_date", "Validade"),
            ("certificate_number", "Certificado"),
            ("inmetro_number", "Nº INMETRO"),
            ("status", "Status"),
        ),
        default_order="expiration_date",
    ),
    EntityConfig(
        slug="lacres",
        title="Lacres",
        model=Seal,
        create_schema=s.SealCreate,
        update_schema=s.SealUpdate,
        response_schema=s.SealResponse,
        search_columns=("seal_number", "memo_number", "service_order"),
        filter_columns=("status", "seal_type", "equipment_id", "technician_id"),
        group_columns=("status", "seal_type"),
        export_columns=(
            ("seal_number", "Lacre"),
            ("seal_type", "Tipo"),
            ("received_date", "Recebimento"),
            ("installation_date", "Instalação"),
            ("memo_number", "Memorando"),
            ("status", "Status"),
        ),
        default_order="received_date",
    ),
    EntityConfig(
        slug="infracoes",
        title="Infrações",
        model=Infraction,
        create_schema=s.InfractionCreate,
        update_schema=s.InfractionUpdate,
        response_schema=s.InfractionResponse,
        search_columns=("month", "datacheck_lane", "physical_lane"),
        filter_columns=("equipment_id", "contract_id", "month", "year"),
        group_columns=("month", "year"),
        sum_column="image_count",
        export_columns=(
            ("equipment.serial_number", "Equipamento"),
            ("date", "Data/Hora"),
            ("month", "Mês"),
            ("year", "Ano"),
            ("datacheck_lane", "Faixa Datacheck"),
            ("physical_lane", "Faixa Física"),
            ("image_count", "Qtd Imagens"),
        ),
        default_order="date",
    ),
    EntityConfig(
        slug="metricas-imagem",
        title="Métricas de Imagem",
        model=ImageMetric,
        create_schema=s.ImageMetricCreate,
        update_schema=s.ImageMetricUpdate,
        response_schema=s.ImageMetricResponse,
        filter_columns=("equipment_id",),
        sum_column="valid_captures",
        export_columns=(
            ("equipment.serial_number", "Equipamento"),
            ("date", "Data"),
            ("total_captures", "Total Capturas"),
            ("valid_captures", "Capturas Válidas"),
            ("utilization_rate", "Taxa Aproveitamento (%)"),
        ),
        default_order="date",
    ),
    EntityConfig(
        slug="estoque",
        title="Estoque",
        model=InventoryItem,
        create_schema=s.InventoryItemCreate,
        update_schema=s.InventoryItemUpdate,
        response_schema=s.InventoryItemResponse,
        search_columns=("component_name", "sku", "category"),
        filter_columns=("category", "location"),
        group_columns=("category",),
        sum_column="quantity",
        export_columns=(
            ("component_name", "Componente"),
            ("sku", "SKU"),
            ("category", "Categoria"),
            ("quantity", "Quantidade"),
            ("min_quantity", "Mínimo"),
            ("unit_price", "Preço Unitário"),
            ("location", "Local"),
        ),
        default_order="component_name",
    ),
    EntityConfig(
        slug="unidades-consumidoras",
        title="Unidades Consumidoras",
        model=EnergyConsumerUnit,
        create_schema=s.EnergyConsumerUnitCreate,
        update_schema=s.EnergyConsumerUnitUpdate,
        response_schema=s.EnergyConsumerUnitResponse,
        search_columns=("consumer_unit", "address"),
        filter_columns=("contract_id",),
        export_columns=(
            ("consumer_unit", "UC"),
            ("address", "Endereço"),
            ("contract.number", "Contrato"),
        ),
        default_order="consumer_unit",
    ),
    EntityConfig(
        slug="contas-energia",
        title="Contas de Energia",
        model=EnergyBill,
        create_schema=s.EnergyBillCreate,
        update_schema=s.EnergyBillUpdate,
        response_schema=s.EnergyBillResponse,
        search_columns=("consumer_unit",),
        filter_columns=("status", "consumer_unit", "contract_id"),
        group_columns=("status",),
        sum_column="value",
        export_columns=(
            ("consumer_unit", "UC"),
            ("reference_month", "Mês de Referência"),
            ("consumption_kwh", "Consumo (kWh)"),
            ("value", "Valor"),
            ("due_date", "Vencimento"),
            ("status", "Status"),
        ),
        default_order="reference_month",
    ),
    EntityConfig(
        slug="conexoes-internet",
        title="Conexões de Internet",
        model=InternetConnection,
        create_schema=s.InternetConnectionCreate,
        update_schema=s.InternetConnectionUpdate,
        response_schema=s.InternetConnectionResponse,
        search_columns=("serial_number", "provider", "plan"),
        filter_columns=("provider", "contract_id"),
        group_columns=("provider",),
        export_columns=(
            ("serial_number", "Número de Série"),
            ("provider", "Provedor"),
            ("plan", "Plano"),
        ),
        default_order="serial_number",
    ),
    EntityConfig(
        slug="contas-internet",
        title="Contas de Internet",
        model=InternetBill,
        create_schema=s.InternetBillCreate,
        update_schema=s.InternetBillUpdate,
        response_schema=s.InternetBillResponse,
        search_columns=("provider",),
        filter_columns=("status", "provider", "connection_id", "contract_id"),
        group_columns=("status", "provider"),
        sum_column="value",
        export_columns=(
            ("provider", "Provedor"),
            ("reference_month", "Mês de Referência"),
            ("value", "Valor"),
            ("due_date", "Vencimento"),
            ("status", "Status"),
        ),
        default_order="reference_month",
    ),
    EntityConfig(
        slug="faturas",
        title="Faturas",
        model=Invoice,
        create_schema=s.InvoiceCreate,
        update_schema=s.InvoiceUpdate,
        response_schema=s.InvoiceResponse,
        search_columns=("number", "notes"),
        filter_columns=("status", "contract_id"),
        group_columns=("status",),
        sum_column="value",
        export_columns=(
            ("number", "Número"),
            ("contract.number", "Contrato"),
            ("issue_date", "Emissão"),
            ("due_date", "Vencimento"),
            ("value", "Valor"),
            ("payment_date", "Pagamento"),
            ("status", "Status"),
        ),
        default_order="issue_date",
    ),
    EntityConfig(
        slug="sla",
        title="Métricas de SLA",
        model=SlaMetric,
        create_schema=s.SlaMetricCreate,
        update_schema=s.SlaMetricUpdate,
        response_schema=s.SlaMetricResponse,
        filter_columns=("contract_id", "target_met"),
        group_columns=("target_met",),
        export_columns=(
            ("contract_id", "Contrato"),
            ("month", "Mês"),
            ("availability", "Disponibilidade (%)"),
            ("response_time", "Tempo de Resposta (h)"),
            ("resolution_time", "Tempo de Solução (h)"),
            ("target_met", "Meta Atingida"),
        ),
        default_order="month",
    ),
    EntityConfig(
        slug="satisfacao",
        title="Satisfação do Cliente",
        model=CustomerSatisfaction,
        create_schema=s.CustomerSatisfactionCreate,
        update_schema=s.CustomerSatisfactionUpdate,
        response_schema=s.CustomerSatisfactionResponse,
        search_columns=("feedback",),
        filter_columns=("contract_id", "quarter", "year"),
        group_columns=("quarter",),
        export_columns=(
            ("contract_id", "Contrato"),
            ("quarter", "Trimestre"),
            ("year", "Ano"),
            ("score", "Nota"),
            ("feedback", "Comentário"),
        ),
        default_order="year",
    ),
    EntityConfig(
        slug="infraestrutura",
        title="Serviços de Infraestrutura",
        model=InfrastructureService,
        create_schema=s.InfrastructureServiceCreate,
        update_schema=s.InfrastructureServiceUpdate,
        response_schema=s.InfrastructureServiceResponse,
        search_columns=("serial_number", "municipality", "service_type"),
        filter_columns=("status", "municipality", "service_type", "contract_id"),
        group_columns=("status", "service_type"),
        export_columns=(
            ("serial_number", "Número de Série"),
            ("municipality", "Município"),
            ("date", "Data"),
            ("service_type", "Serviço"),
            ("status", "Status"),
        ),
        default_order="date",
    ),
    EntityConfig(
        slug="atendimentos",
        title="Atendimentos",
        model=ServiceCall,
        create_schema=s.ServiceCallCreate,
        update_schema=s.ServiceCallUpdate,
        response_schema=s.ServiceCallResponse,
        search_columns=("type", "description", "mob_code"),
        filter_columns=("status", "type", "contract_id", "equipment_id", "employee_id"),
        group_columns=("status", "type"),
        export_columns=(
            ("date", "Data"),
            ("type", "Tipo"),
            ("description", "Descrição"),
            ("resolution", "Resolução"),
            ("mob_code", "Cód. Mob"),
            ("status", "Status"),
        ),
        default_order="date",
    ),
    EntityConfig(
        slug="metas",
        title="Metas de Atendimento",
        model=ServiceGoal,
        create_schema=s.ServiceGoalCreate,
        update_schema=s.ServiceGoalUpdate,
        response_schema=s.ServiceGoalResponse,
        filter_columns=("contract_id",),
        export_columns=(
            ("contract.number", "Contrato"),
            ("month", "Mês"),
            ("target_calls", "Meta Atendimentos"),
            ("completed_calls", "Atendimentos Realizados"),
            ("percentage", "Percentual"),
        ),
        default_order="month",
    ),
    EntityConfig(
        slug="pendencias",
        title="Pendências",
        model=PendingIssue,
        create_schema=s.PendingIssueCreate,
        update_schema=s.PendingIssueUpdate,
        response_schema=s.PendingIssueResponse,
        search_columns=("title", "description", "assigned_to"),
        filter_columns=("status", "priority", "column_key", "contract_id"),
        group_columns=("status", "priority", "column_key"),
        export_columns=(
            ("title", "Título"),
            ("priority", "Prioridade"),
            ("status", "Status"),
            ("column_key", "Coluna"),
            ("due_date", "Prazo"),
            ("assigned_to", "Responsável"),
        ),
        default_order="due_date",
    ),
]

ENTIDADES: dict[str, EntityConfig] = {config.slug: config for config in _ENTITY_LIST}


def get_entity_or_404(slug: str) -> EntityConfig:
    """Look up a registry entry or raise HTTP 404 with a Portuguese message."""
    config = ENTIDADES.get(slug)
    if config is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Entidade '{slug}' não encontrada.",
        )
    return config
