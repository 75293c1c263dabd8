"""Column-mapping registry: one ``ImportConfig`` per importable entity.

Each config declares which spreadsheet headers feed which model fields,
how every cell is normalised, which columns the downloadable template
carries, and how human keys (plate, serial number, contract number, CPF)
are resolved to foreign keys at import time.

Usage::

    from app.parsers.import_configs import get_import_config

    config = get_import_config("fuel_records")
    result = map_rows(rows, config.mappings)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.models import (
    Advance,
    Calibration,
    Contract,
    CustomerSatisfaction,
    Employee,
    EnergyBill,
    Equipment,
    FuelRecord,
    ImageMetric,
    Infraction,
    InfrastructureService,
    InternetBill,
    InternetConnection,
    InventoryItem,
    Invoice,
    MaintenanceRecord,
    MileageRecord,
    PendingIssue,
    Seal,
    ServiceCall,
    ServiceGoal,
    SlaMetric,
    TollTag,
    Vehicle,
)
from app.parsers.base_parser import ColumnMapping
from app.parsers.transforms import (
    status_map,
    to_bool,
    to_date,
    to_datetime,
    to_integer,
    to_month,
    to_number,
    to_text,
)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Lookup:
    """Foreign-key resolution applied to mapped rows before insert.

    Attributes:
        source_field: Key of the mapped row holding the human value.
        target_field: FK column to fill on the model.
        model: Referenced model.
        match_column: Column of ``model`` compared with the value
            (trimmed, case-insensitive).
        label: Portuguese name used in error messages.
        digits_only: Compare digits only (CPF, CNPJ).
    """

    source_field: str
    target_field: str
    model: Any
    match_column: str
    label: str
    digits_only: bool = False


@dataclass(frozen=True)
class ImportConfig:
    key: str
    label: str
    model: Any
    template_filename: str
    mappings: list[ColumnMapping]
    template_columns: list[tuple[str, str]]
    lookups: list[Lookup] = field(default_factory=list)

    @property
    def template_labels(self) -> list[str]:
        return [label for _, label in self.template_columns]


# ---------------------------------------------------------------------------
# Status normalisers
# ---------------------------------------------------------------------------

contract_status = status_map(
    {
        "ativo": "active",
        "inativo": "inactive",
        "pendente": "pending",
        "cancelado": "cancelled",
        "vencido": "expired",
        "expirado": "expired",
    },
    default="active",
)

employee_status = status_map(
    {
        "ativo": "active",
        "inativo": "inactive",
        "ferias": "vacation",
        "em ferias": "vacation",
        "desligado": "terminated",
        "demitido": "terminated",
    },
    default="active",
)

asset_status = status_map(
    {
        "ativo": "active",
        "inativo": "inactive",
        "manutencao": "maintenance",
        "em manutencao": "maintenance",
    },
    default="active",
)

bill_status = status_map(
    {
        "pendente": "pending",
        "em aberto": "pending",
        "pago": "paid",
        "paga": "paid",
        "vencido": "overdue",
        "vencida": "overdue",
        "atrasado": "overdue",
    },
    default="pending",
)

invoice_status = status_map(
    {
        "pendente": "pending",
        "em aberto": "pending",
        "pago": "paid",
        "paga": "paid",
        "vencido": "overdue",
        "vencida": "overdue",
        "cancelado": "cancelled",
        "cancelada": "cancelled",
    },
    default="pending",
)

advance_status = status_map(
    {
        "pendente": "pending",
        "aprovado": "approved",
        "pago": "paid",
        "rejeitado": "rejected",
        "recusado": "rejected",
    },
    default="pending",
)

calibration_status = status_map(
    {
        "valido": "valid",
        "valida": "valid",
        "vencido": "expired",
        "vencida": "expired",
        "expirado": "expired",
        "pendente": "pending",
    },
    default="valid",
)

seal_status = status_map(
    {
        "disponivel": "available",
        "instalado": "installed",
        "danificado": "damaged",
        "perdido": "lost",
        "extraviado": "lost",
    },
    default="available",
)

infrastructure_status = status_map(
    {
        "agendado": "scheduled",
        "finalizado": "completed",
        "concluido": "completed",
        "sem agendamento": "unscheduled",
        "cancelado": "cancelled",
    },
    default="scheduled",
)

issue_status = status_map(
    {
        "aberto": "open",
        "aberta": "open",
        "em andamento": "in_progress",
        "resolvido": "resolved",
        "resolvida": "resolved",
        "fechado": "closed",
        "fechada": "closed",
    },
    default="open",
)

service_call_status = status_map(
    {
        "aberto": "open",
        "aberta": "open",
        "em andamento": "in_progress",
        "em atendimento": "in_progress",
        "fechado": "closed",
        "fechada": "closed",
        "encerrado": "closed",
        "concluido": "closed",
    },
    default="open",
)

issue_priority = status_map(
    {
        "baixa": "low",
        "media": "medium",
        "alta": "high",
        "urgente": "urgent",
    },
    default="medium",
)


# ---------------------------------------------------------------------------
# Shared lookups
# ---------------------------------------------------------------------------

CONTRACT_LOOKUP = Lookup("contract_number", "contract_id", Contract, "number", "Contrato")
VEHICLE_LOOKUP = Lookup("vehicle_plate", "vehicle_id", Vehicle, "plate", "Veículo")
EQUIPMENT_LOOKUP = Lookup(
    "equipment_serial", "equipment_id", Equipment, "serial_number", "Equipamento"
)

_CONTRACT_MAPPING = ColumnMapping("Contrato", "contract_number", transform=to_text)
_CONTRACT_COLUMN = ("contract_number", "Contrato")


# ---------------------------------------------------------------------------
# Entity configs
# ---------------------------------------------------------------------------

CONTRACTS = ImportConfig(
    key="contracts",
    label="Contratos",
    model=Contract,
    template_filename="contratos",
    mappings=[
        ColumnMapping("Número", "number", True, to_text),
        ColumnMapping("Cliente", "client_name", True, to_text),
        ColumnMapping("Descrição", "description", transform=to_text),
        ColumnMapping("Valor", "value", transform=to_number),
        ColumnMapping("Data Início", "start_date", transform=to_date),
        ColumnMapping("Data Fim", "end_date", transform=to_date),
        ColumnMapping("Estado", "state", transform=to_text),
        ColumnMapping("Cidade", "city", transform=to_text),
        ColumnMapping("Centro de Custo", "cost_center", transform=to_text),
        ColumnMapping("Status", "status", transform=contract_status),
    ],
    template_columns=[
        ("number", "Número"),
        ("client_name", "Cliente"),
        ("description", "Descrição"),
        ("value", "Valor"),
        ("start_date", "Data Início"),
        ("end_date", "Data Fim"),
        ("state", "Estado"),
        ("city", "Cidade"),
        ("cost_center", "Centro de Custo"),
        ("status", "Status"),
    ],
)

EMPLOYEES = ImportConfig(
    key="employees",
    label="Funcionários",
    model=Employee,
    template_filename="funcionarios",
    mappings=[
        ColumnMapping("Nome Completo", "full_name", True, to_text),
        ColumnMapping("Nome", "full_name", transform=to_text),
        ColumnMapping("CPF", "cpf", transform=to_text),
        ColumnMapping("RG", "rg", transform=to_text),
        ColumnMapping("Email", "email", transform=to_text),
        ColumnMapping("E-mail", "email", transform=to_text),
        ColumnMapping("Telefone", "phone", transform=to_text),
        ColumnMapping("Cargo", "role", transform=to_text),
        ColumnMapping("Departamento", "department", transform=to_text),
        ColumnMapping("Endereço", "address", transform=to_text),
        ColumnMapping("Cidade", "city", transform=to_text),
        ColumnMapping("Estado", "state", transform=to_text),
        ColumnMapping("Data Admissão", "admission_date", transform=to_date),
        ColumnMapping("Data Desligamento", "termination_date", transform=to_date),
        ColumnMapping("Salário", "salary", transform=to_number),
        ColumnMapping("Status", "status", transform=employee_status),
        _CONTRACT_MAPPING,
    ],
    template_columns=[
        ("full_name", "Nome Completo"),
        ("cpf", "CPF"),
        ("rg", "RG"),
        ("email", "Email"),
        ("phone", "Telefone"),
        ("role", "Cargo"),
        ("department", "Departamento"),
        ("address", "Endereço"),
        ("city", "Cidade"),
        ("state", "Estado"),
        ("admission_date", "Data Admissão"),
        ("termination_date", "Data Desligamento"),
        ("salary", "Salário"),
        ("status", "Status"),
        _CONTRACT_COLUMN,
    ],
    lookups=[CONTRACT_LOOKUP],
)

EQUIPMENT = ImportConfig(
    key="equipment",
    label="Equipamentos",
    model=Equipment,
    template_filename="equipamentos",
    mappings=[
        ColumnMapping("Número de Série", "serial_number", True, to_text),
        ColumnMapping("Nº de Série", "serial_number", transform=to_text),
        ColumnMapping("Serial", "serial_number", transform=to_text),
        ColumnMapping("Tipo", "type", transform=to_text),
        ColumnMapping("Marca", "brand", transform=to_text),
        ColumnMapping("Modelo", "model", transform=to_text),
        ColumnMapping("Endereço", "address", transform=to_text),
        ColumnMapping("Latitude", "latitude", transform=to_number),
        ColumnMapping("Longitude", "longitude", transform=to_number),
        ColumnMapping("Data Instalação", "installation_date", transform=to_date),
        ColumnMapping("Limite de Velocidade", "speed_limit", transform=to_integer),
        ColumnMapping("Qtd Faixas", "lanes_qty", transform=to_integer),
        ColumnMapping("Status", "status", transform=asset_status),
        _CONTRACT_MAPPING,
    ],
    template_columns=[
        ("serial_number", "Número de Série"),
        ("type", "Tipo"),
        ("brand", "Marca"),
        ("model", "Modelo"),
        ("address", "Endereço"),
        ("latitude", "Latitude"),
        ("longitude", "Longitude"),
        ("installation_date", "Data Instalação"),
        ("speed_limit", "Limite de Velocidade"),
        ("lanes_qty", "Qtd Faixas"),
        ("status", "Status"),
        _CONTRACT_COLUMN,
    ],
    lookups=[CONTRACT_LOOKUP],
)

VEHICLES = ImportConfig(
    key="vehicles",
    label="Veículos",
    model=Vehicle,
    template_filename="veiculos",
    mappings=[
        ColumnMapping("Placa", "plate", True, to_text),
        ColumnMapping("Marca", "brand", transform=to_text),
        ColumnMapping("Modelo", "model", transform=to_text),
        ColumnMapping("Ano", "year", transform=to_integer),
        ColumnMapping("Cor", "color", transform=to_text),
        ColumnMapping("Renavam", "renavam", transform=to_text),
        ColumnMapping("Chassi", "chassis", transform=to_text),
        ColumnMapping("Cartão Combustível", "fuel_card", transform=to_text),
        ColumnMapping("Combustível", "fuel_type", transform=to_text),
        ColumnMapping("KM Atual", "current_km", transform=to_integer),
        ColumnMapping("Status", "status", transform=asset_status),
        _CONTRACT_MAPPING,
    ],
    template_columns=[
        ("plate", "Placa"),
        ("brand", "Marca"),
        ("model", "Modelo"),
        ("year", "Ano"),
        ("color", "Cor"),
        ("renavam", "Renavam"),
        ("chassis", "Chassi"),
        ("fuel_card", "Cartão Combustível"),
        ("fuel_type", "Combustível"),
        ("current_km", "KM Atual"),
        ("status", "Status"),
        _CONTRACT_COLUMN,
    ],
    lookups=[CONTRACT_LOOKUP],
)

FUEL_RECORDS = ImportConfig(
    key="fuel_records",
    label="Abastecimentos",
    model=FuelRecord,
    template_filename="abastecimentos",
    mappings=[
        ColumnMapping("Placa", "vehicle_plate", True, to_text),
        ColumnMapping("Data", "date", True, to_date),
        ColumnMapping("Litros", "liters", True, to_number),
        ColumnMapping("Preço/Litro", "price_per_liter", transform=to_number),
        ColumnMapping("Valor Total", "total_value", transform=to_number),
        ColumnMapping("Odômetro", "odometer", transform=to_integer),
        ColumnMapping("Tipo Combustível", "fuel_type", transform=to_text),
        ColumnMapping("Posto", "station", transform=to_text),
    ],
    template_columns=[
        ("vehicle_plate", "Placa"),
        ("date", "Data"),
        ("liters", "Litros"),
        ("price_per_liter", "Preço/Litro"),
        ("total_value", "Valor Total"),
        ("odometer", "Odômetro"),
        ("fuel_type", "Tipo Combustível"),
        ("station", "Posto"),
    ],
    lookups=[VEHICLE_LOOKUP],
)

MAINTENANCE_RECORDS = ImportConfig(
    key="maintenance_records",
    label="Manutenções",
    model=MaintenanceRecord,
    template_filename="manutencoes",
    mappings=[
        ColumnMapping("Placa", "vehicle_plate", True, to_text),
        ColumnMapping("Data", "date", True, to_date),
        ColumnMapping("Tipo", "type", True, to_text),
        ColumnMapping("Descrição", "description", transform=to_text),
        ColumnMapping("Custo", "cost", transform=to_number),
        ColumnMapping("Odômetro", "odometer", transform=to_integer),
        ColumnMapping("Oficina", "workshop", transform=to_text),
    ],
    template_columns=[
        ("vehicle_plate", "Placa"),
        ("date", "Data"),
        ("type", "Tipo"),
        ("description", "Descrição"),
        ("cost", "Custo"),
        ("odometer", "Odômetro"),
        ("workshop", "Oficina"),
    ],
    lookups=[VEHICLE_LOOKUP],
)

MILEAGE_RECORDS = ImportConfig(
    key="mileage_records",
    label="Quilometragem",
    model=MileageRecord,
    template_filename="quilometragem",
    mappings=[
        ColumnMapping("Placa", "vehicle_plate", True, to_text),
        ColumnMapping("CPF Motorista", "driver_cpf", transform=to_text),
        ColumnMapping("Data", "date", True, to_date),
        ColumnMapping("KM Inicial", "initial_km", True, to_integer),
        ColumnMapping("KM Final", "final_km", True, to_integer),
        ColumnMapping("Observações", "notes", transform=to_text),
    ],
    template_columns=[
        ("vehicle_plate", "Placa"),
        ("driver_cpf", "CPF Motorista"),
        ("date", "Data"),
        ("initial_km", "KM Inicial"),
        ("final_km", "KM Final"),
        ("notes", "Observações"),
    ],
    lookups=[
        VEHICLE_LOOKUP,
        Lookup("driver_cpf", "employee_id", Employee, "cpf", "Funcionário", digits_only=True),
    ],
)

TOLL_TAGS = ImportConfig(
    key="toll_tags",
    label="Pedágios",
    model=TollTag,
    template_filename="pedagios",
    mappings=[
        ColumnMapping("Número Tag", "tag_number", True, to_text),
        ColumnMapping("Placa", "vehicle_plate", transform=to_text),
        ColumnMapping("Data Passagem", "passage_date", True, to_datetime),
        ColumnMapping("Valor", "value", True, to_number),
        ColumnMapping("Praça", "toll_plaza", transform=to_text),
    ],
    template_columns=[
        ("tag_number", "Número Tag"),
        ("vehicle_plate", "Placa"),
        ("passage_date", "Data Passagem"),
        ("value", "Valor"),
        ("toll_plaza", "Praça"),
    ],
    lookups=[VEHICLE_LOOKUP],
)

ADVANCES = ImportConfig(
    key="advances",
    label="Adiantamentos",
    model=Advance,
    template_filename="adiantamentos",
    mappings=[
        ColumnMapping("CPF", "employee_cpf", True, to_text),
        ColumnMapping("Data", "date", True, to_date),
        ColumnMapping("Valor", "value", True, to_number),
        ColumnMapping("Motivo", "reason", transform=to_text),
        ColumnMapping("Status", "status", transform=advance_status),
    ],
    template_columns=[
        ("employee_cpf", "CPF"),
        ("date", "Data"),
        ("value", "Valor"),
        ("reason", "Motivo"),
        ("status", "Status"),
    ],
    lookups=[
        Lookup("employee_cpf", "employee_id", Employee, "cpf", "Funcionário", digits_only=True),
    ],
)

CALIBRATIONS = ImportConfig(
    key="calibrations",
    label="Aferições",
    model=Calibration,
    template_filename="afericoes",
    mappings=[
        ColumnMapping("Número de Série", "equipment_serial", True, to_text),
        ColumnMapping("Nº de Série", "equipment_serial", transform=to_text),
        ColumnMapping("Equipamento", "equipment_serial", transform=to_text),
        ColumnMapping("Data Aferição", "calibration_date", True, to_date),
        ColumnMapping("Data Vencimento", "expiration_date", True, to_date),
        ColumnMapping("Número Certificado", "certificate_number", transform=to_text),
        ColumnMapping("Número INMETRO", "inmetro_number", transform=to_text),
        ColumnMapping("Status", "status", transform=calibration_status),
    ],
    template_columns=[
        ("equipment_serial", "Número de Série"),
        ("calibration_date", "Data Aferição"),
        ("expiration_date", "Data Vencimento"),
        ("certificate_number", "Número Certificado"),
        ("inmetro_number", "Número INMETRO"),
        ("status", "Status"),
    ],
    lookups=[EQUIPMENT_LOOKUP],
)

SEALS = ImportConfig(
    key="seals",
    label="Lacres",
    model=Seal,
    template_filename="lacres",
    mappings=[
        ColumnMapping("Número Lacre", "seal_number", True, to_text),
        ColumnMapping("Tipo Lacre", "seal_type", transform=to_text),
        ColumnMapping("Data Recebimento", "received_date", True, to_date),
        ColumnMapping("Data Instalação", "installation_date", transform=to_date),
        ColumnMapping("Memorando", "memo_number", transform=to_text),
        ColumnMapping("Ordem de Serviço", "service_order", transform=to_text),
        ColumnMapping("Número de Série", "equipment_serial", transform=to_text),
        ColumnMapping("Equipamento", "equipment_serial", transform=to_text),
        ColumnMapping("CPF Técnico", "technician_cpf", transform=to_text),
        ColumnMapping("Status", "status", transform=seal_status),
        ColumnMapping("Observações", "notes", transform=to_text),
    ],
    template_columns=[
        ("seal_number", "Número Lacre"),
        ("seal_type", "Tipo Lacre"),
        ("received_date", "Data Recebimento"),
        ("installation_date", "Data Instalação"),
        ("memo_number", "Memorando"),
        ("service_order", "Ordem de Serviço"),
        ("equipment_serial", "Número de Série"),
        ("technician_cpf", "CPF Técnico"),
        ("status", "Status"),
        ("notes", "Observações"),
    ],
    lookups=[
        EQUIPMENT_LOOKUP,
        Lookup("technician_cpf", "technician_id", Employee, "cpf", "Técnico", digits_only=True),
    ],
)

ENERGY_BILLS = ImportConfig(
    key="energy_bills",
    label="Contas de Energia",
    model=EnergyBill,
    template_filename="contas_energia",
    mappings=[
        ColumnMapping("Unidade Consumidora", "consumer_unit", True, to_text),
        ColumnMapping("UC", "consumer_unit", transform=to_text),
        ColumnMapping("Mês Referência", "reference_month", True, to_month),
        ColumnMapping("Consumo kWh", "consumption_kwh", transform=to_number),
        ColumnMapping("Valor", "value", transform=to_number),
        ColumnMapping("Vencimento", "due_date", transform=to_date),
        ColumnMapping("Status", "status", transform=bill_status),
        ColumnMapping("Fatura Zerada", "zero_invoice", transform=to_bool),
        _CONTRACT_MAPPING,
    ],
    template_columns=[
        ("consumer_unit", "Unidade Consumidora"),
        ("reference_month", "Mês Referência"),
        ("consumption_kwh", "Consumo kWh"),
        ("value", "Valor"),
        ("due_date", "Vencimento"),
        ("status", "Status"),
        ("zero_invoice", "Fatura Zerada"),
        _CONTRACT_COLUMN,
    ],
    lookups=[CONTRACT_LOOKUP],
)

INTERNET_BILLS = ImportConfig(
    key="internet_bills",
    label="Contas de Internet",
    model=InternetBill,
    template_filename="contas_internet",
    mappings=[
        ColumnMapping("Provedor", "provider", True, to_text),
        ColumnMapping("Conexão", "connection_serial", transform=to_text),
        ColumnMapping("Mês Referência", "reference_month", True, to_month),
        ColumnMapping("Valor", "value", transform=to_number),
        ColumnMapping("Vencimento", "due_date", transform=to_date),
        ColumnMapping("Status", "status", transform=bill_status),
        _CONTRACT_MAPPING,
    ],
    template_columns=[
        ("provider", "Provedor"),
        ("connection_serial", "Conexão"),
        ("reference_month", "Mês Referência"),
        ("value", "Valor"),
        ("due_date", "Vencimento"),
        ("status", "Status"),
        _CONTRACT_COLUMN,
    ],
    lookups=[
        Lookup("connection_serial", "connection_id", InternetConnection, "serial_number", "Conexão"),
        CONTRACT_LOOKUP,
    ],
)

INVOICES = ImportConfig(
    key="invoices",
    label="Faturas",
    model=Invoice,
    template_filename="faturas",
    mappings=[
        ColumnMapping("Número", "number", True, to_text),
        _CONTRACT_MAPPING,
        ColumnMapping("Data Emissão", "issue_date", True, to_date),
        ColumnMapping("Valor", "value", True, to_number),
        ColumnMapping("Vencimento", "due_date", transform=to_date),
        ColumnMapping("Desconto", "discount", transform=to_number),
        ColumnMapping("Valor Mensal", "monthly_value", transform=to_number),
        ColumnMapping("Data Pagamento", "payment_date", transform=to_date),
        ColumnMapping("Status", "status", transform=invoice_status),
        ColumnMapping("Observações", "notes", transform=to_text),
    ],
    template_columns=[
        ("number", "Número"),
        _CONTRACT_COLUMN,
        ("issue_date", "Data Emissão"),
        ("value", "Valor"),
        ("due_date", "Vencimento"),
        ("discount", "Desconto"),
        ("monthly_value", "Valor Mensal"),
        ("payment_date", "Data Pagamento"),
        ("status", "Status"),
        ("notes", "Observações"),
    ],
    lookups=[CONTRACT_LOOKUP],
)

INVENTORY = ImportConfig(
    key="inventory",
    label="Estoque",
    model=InventoryItem,
    template_filename="estoque",
    mappings=[
        ColumnMapping("Componente", "component_name", True, to_text),
        ColumnMapping("SKU", "sku", transform=to_text),
        ColumnMapping("Categoria", "category", transform=to_text),
        ColumnMapping("Quantidade", "quantity", transform=to_integer),
        ColumnMapping("Quantidade Mínima", "min_quantity", transform=to_integer),
        ColumnMapping("Preço Unitário", "unit_price", transform=to_number),
        ColumnMapping("Localização", "location", transform=to_text),
    ],
    template_columns=[
        ("component_name", "Componente"),
        ("sku", "SKU"),
        ("category", "Categoria"),
        ("quantity", "Quantidade"),
        ("min_quantity", "Quantidade Mínima"),
        ("unit_price", "Preço Unitário"),
        ("location", "Localização"),
    ],
)

INFRASTRUCTURE_SERVICES = ImportConfig(
    key="infrastructure_services",
    label="Serviços de Infraestrutura",
    model=InfrastructureService,
    template_filename="servicos_infraestrutura",
    mappings=[
        ColumnMapping("Número de Série", "serial_number", True, to_text),
        ColumnMapping("Município", "municipality", True, to_text),
        ColumnMapping("Data", "date", True, to_datetime),
        ColumnMapping("Tipo de Serviço", "service_type", True, to_text),
        ColumnMapping("Status", "status", transform=infrastructure_status),
        ColumnMapping("Observações", "notes", transform=to_text),
        _CONTRACT_MAPPING,
    ],
    template_columns=[
        ("serial_number", "Número de Série"),
        ("municipality", "Município"),
        ("date", "Data"),
        ("service_type", "Tipo de Serviço"),
        ("status", "Status"),
        ("notes", "Observações"),
        _CONTRACT_COLUMN,
    ],
    lookups=[CONTRACT_LOOKUP],
)

PENDING_ISSUES = ImportConfig(
    key="pending_issues",
    label="Pendências",
    model=PendingIssue,
    template_filename="pendencias",
    mappings=[
        ColumnMapping("Título", "title", True, to_text),
        ColumnMapping("Descrição", "description", transform=to_text),
        ColumnMapping("Tipo", "type", transform=to_text),
        ColumnMapping("Prioridade", "priority", transform=issue_priority),
        ColumnMapping("Status", "status", transform=issue_status),
        ColumnMapping("Endereço", "address", transform=to_text),
        ColumnMapping("Prazo", "due_date", transform=to_date),
        ColumnMapping("Responsável", "assigned_to", transform=to_text),
    ],
    template_columns=[
        ("title", "Título"),
        ("description", "Descrição"),
        ("type", "Tipo"),
        ("priority", "Prioridade"),
        ("status", "Status"),
        ("address", "Endereço"),
        ("due_date", "Prazo"),
        ("assigned_to", "Responsável"),
    ],
)

CUSTOMER_SATISFACTION = ImportConfig(
    key="customer_satisfaction",
    label="Satisfação do Cliente",
    model=CustomerSatisfaction,
    template_filename="satisfacao",
    mappings=[
        _CONTRACT_MAPPING,
        ColumnMapping("Trimestre", "quarter", True, to_text),
        ColumnMapping("Ano", "year", True, to_integer),
        ColumnMapping("Nota", "score", transform=to_number),
        ColumnMapping("Feedback", "feedback", transform=to_text),
    ],
    template_columns=[
        _CONTRACT_COLUMN,
        ("quarter", "Trimestre"),
        ("year", "Ano"),
        ("score", "Nota"),
        ("feedback", "Feedback"),
    ],
    lookups=[CONTRACT_LOOKUP],
)

SLA_METRICS = ImportConfig(
    key="sla_metrics",
    label="Métricas de SLA",
    model=SlaMetric,
    template_filename="sla",
    mappings=[
        _CONTRACT_MAPPING,
        ColumnMapping("Mês", "month", True, to_month),
        ColumnMapping("Disponibilidade", "availability", transform=to_number),
        ColumnMapping("Tempo Resposta", "response_time", transform=to_number),
        ColumnMapping("Tempo Resolução", "resolution_time", transform=to_number),
        ColumnMapping("Meta Atingida", "target_met", transform=to_bool),
    ],
    template_columns=[
        _CONTRACT_COLUMN,
        ("month", "Mês"),
        ("availability", "Disponibilidade"),
        ("response_time", "Tempo Resposta"),
        ("resolution_time", "Tempo Resolução"),
        ("target_met", "Meta Atingida"),
    ],
    lookups=[CONTRACT_LOOKUP],
)

INFRACTIONS = ImportConfig(
    key="infractions",
    label="Infrações",
    model=Infraction,
    template_filename="infracoes",
    mappings=[
        ColumnMapping("Número de Série", "equipment_serial", True, to_text),
        ColumnMapping("Equipamento", "equipment_serial", transform=to_text),
        ColumnMapping("Data/Hora", "date", transform=to_datetime),
        ColumnMapping("Mês", "month", transform=to_text),
        ColumnMapping("Ano", "year", transform=to_integer),
        ColumnMapping("Faixa Datacheck", "datacheck_lane", transform=to_text),
        ColumnMapping("Faixa Física", "physical_lane", transform=to_text),
        ColumnMapping("Qtd Imagens", "image_count", transform=to_integer),
        _CONTRACT_MAPPING,
    ],
    template_columns=[
        ("equipment_serial", "Número de Série"),
        ("date", "Data/Hora"),
        ("month", "Mês"),
        ("year", "Ano"),
        ("datacheck_lane", "Faixa Datacheck"),
        ("physical_lane", "Faixa Física"),
        ("image_count", "Qtd Imagens"),
        _CONTRACT_COLUMN,
    ],
    lookups=[EQUIPMENT_LOOKUP, CONTRACT_LOOKUP],
)

IMAGE_METRICS = ImportConfig(
    key="image_metrics",
    label="Métricas de Imagem",
    model=ImageMetric,
    template_filename="metricas_imagem",
    mappings=[
        ColumnMapping("Número de Série", "equipment_serial", True, to_text),
        ColumnMapping("Equipamento", "equipment_serial", transform=to_text),
        ColumnMapping("Data", "date", True, to_date),
        ColumnMapping("Total Capturas", "total_captures", transform=to_integer),
        ColumnMapping("Capturas Válidas", "valid_captures", transform=to_integer),
        ColumnMapping("Taxa Aproveitamento", "utilization_rate", transform=to_number),
    ],
    template_columns=[
        ("equipment_serial", "Número de Série"),
        ("date", "Data"),
        ("total_captures", "Total Capturas"),
        ("valid_captures", "Capturas Válidas"),
        ("utilization_rate", "Taxa Aproveitamento"),
    ],
    lookups=[EQUIPMENT_LOOKUP],
)

SERVICE_CALLS = ImportConfig(
    key="service_calls",
    label="Atendimentos",
    model=ServiceCall,
    template_filename="atendimentos",
    mappings=[
        ColumnMapping("Data", "date", True, to_date),
        ColumnMapping("Tipo", "type", transform=to_text),
        ColumnMapping("Descrição", "description", transform=to_text),
        ColumnMapping("Resolução", "resolution", transform=to_text),
        ColumnMapping("Cód. Mob", "mob_code", transform=to_text),
        ColumnMapping("Status", "status", transform=service_call_status),
        _CONTRACT_MAPPING,
        ColumnMapping("Número de Série", "equipment_serial", transform=to_text),
        ColumnMapping("CPF Técnico", "technician_cpf", transform=to_text),
    ],
    template_columns=[
        ("date", "Data"),
        ("type", "Tipo"),
        ("description", "Descrição"),
        ("resolution", "Resolução"),
        ("mob_code", "Cód. Mob"),
        ("status", "Status"),
        _CONTRACT_COLUMN,
        ("equipment_serial", "Número de Série"),
        ("technician_cpf", "CPF Técnico"),
    ],
    lookups=[
        CONTRACT_LOOKUP,
        EQUIPMENT_LOOKUP,
        Lookup("technician_cpf", "employee_id", Employee, "cpf", "Técnico", digits_only=True),
    ],
)

SERVICE_GOALS = ImportConfig(
    key="service_goals",
    label="Metas de Atendimento",
    model=ServiceGoal,
    template_filename="metas",
    mappings=[
        ColumnMapping("Contrato", "contract_number", True, to_text),
        ColumnMapping("Mês", "month", True, to_month),
        ColumnMapping("Meta Atendimentos", "target_calls", transform=to_integer),
        ColumnMapping("Atendimentos Realizados", "completed_calls", transform=to_integer),
        ColumnMapping("Percentual", "percentage", transform=to_number),
    ],
    template_columns=[
        _CONTRACT_COLUMN,
        ("month", "Mês"),
        ("target_calls", "Meta Atendimentos"),
        ("completed_calls", "Atendimentos Realizados"),
        ("percentage", "Percentual"),
    ],
    lookups=[CONTRACT_LOOKUP],
)



IMPORT_CONFIGS: dict[str, ImportConfig] = {
    config.key: config
    for config in (
        CONTRACTS,
        EMPLOYEES,
        EQUIPMENT,
        VEHICLES,
        FUEL_RECORDS,
        MAINTENANCE_RECORDS,
        MILEAGE_RECORDS,
        TOLL_TAGS,
        ADVANCES,
        CALIBRATIONS,
        SEALS,
        INFRACTIONS,
        IMAGE_METRICS,
        ENERGY_BILLS,
        INTERNET_BILLS,
        INVOICES,
        INVENTORY,
        INFRASTRUCTURE_SERVICES,
        PENDING_ISSUES,
        CUSTOMER_SATISFACTION,
        SLA_METRICS,
        SERVICE_CALLS,
        SERVICE_GOALS,
    )
}


def get_import_config(key: str) -> ImportConfig | None:
    return IMPORT_CONFIGS.get(key)
