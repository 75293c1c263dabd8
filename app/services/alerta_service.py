"""
Alertas service layer.

The alert engine derives warnings from the current database state on every
call; nothing is stored.  ``compute_alerts`` runs every rule, then the
result is stable-sorted by severity (critical, high, medium, low) so rules
keep their relative order inside a severity band.

Alert rules (14 total)
----------------------
Rule 1  — Contract expiring (effective end date ≤ 60 days)   → day table
Rule 2  — Latest amendment expiring (≤ 90 days, no rule 1)   → high / medium
Rule 3  — Calibration expiring (status valid, ≤ 60 days)     → day table
Rule 4  — Pending invoice due (≤ 15 days)                    → day table
Rule 5  — Inventory at or below minimum                      → by stock ratio
Rule 6  — Equipment in maintenance ≥ 7 days                  → high / medium
Rule 7  — Pending energy bill due (≤ 15 days)                → day table
Rule 8  — Pending internet bill due (≤ 15 days)              → day table
Rule 9  — Vehicle mileage this month ≥ 2,000 km              → by km
Rule 10 — Energy bill value anomaly (> 30 % off the mean)    → high / medium
Rule 11 — Internet bill value anomaly (> 30 % off the mean)  → high / medium
Rule 12 — Consumer unit / connection without a monthly bill  → high / medium
Rule 13 — Active equipment without a valid calibration       → high
Rule 14 — Active contract without an invoice in 2 months     → medium

Day table: ``days ≤ 0`` critical, ``≤ 15`` high, ``≤ 30`` medium, else low.

Design notes
------------
- Every rule is wrapped in its own try/except so that one failing rule
  does not abort the whole computation; the failure is logged with its
  traceback and the rule contributes no alerts.
- Alert ids are ``"{prefix}-{entity_id}"`` so the same condition on the
  same row always produces the same id between calls.
- Day counts are whole calendar days between ``today`` and the deadline;
  ``today`` is injectable for tests.
"""

from __future__ import annotations

import calendar
import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Any, Callable

from sqlalchemy.orm import Session

from app.models.calibration import Calibration
from app.models.contract import Contract, ContractAmendment
from app.models.energy import EnergyBill, EnergyConsumerUnit
from app.models.equipment import Equipment
from app.models.internet import InternetBill, InternetConnection
from app.models.inventory import InventoryItem
from app.models.invoice import Invoice
from app.models.mileage_record import MileageRecord
from app.models.vehicle import Vehicle
from app.schemas.alerta import AlertSummary, SystemAlert
from app.utils.constants import (
    ANOMALIA_DESVIO,
    ANOMALIA_DESVIO_ALTO,
    ANOMALIA_MIN_CONTAS,
    DIA_LIMITE_CONTA_MES_ATUAL,
    DIAS_ALERTA_ADITIVO,
    DIAS_ALERTA_ADITIVO_ALTO,
    DIAS_ALERTA_AFERICAO,
    DIAS_ALERTA_CONTA,
    DIAS_ALERTA_CONTRATO,
    DIAS_ALERTA_FATURA,
    DIAS_EQUIPAMENTO_MANUTENCAO,
    DIAS_EQUIPAMENTO_MANUTENCAO_ALTO,
    DIAS_SEVERIDADE_ALTA,
    DIAS_SEVERIDADE_MEDIA,
    KM_MENSAL_ALTO,
    KM_MENSAL_AVISO,
    KM_MENSAL_LIMITE,
    MESES_SEM_FATURA,
    SEVERITIES,
    SEVERITY_ORDER,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _severity_for_days(days: int) -> str:
    """Map days-until-deadline to a severity using the shared day table."""
    if days <= 0:
        return "critical"
    if days <= DIAS_SEVERIDADE_ALTA:
        return "high"
    if days <= DIAS_SEVERIDADE_MEDIA:
        return "medium"
    return "low"


def _severity_for_mileage(total_km: float) -> str:
    """Mileage severity: ≥ 3,000 km critical, > 2,500 km high, else medium."""
    if total_km >= KM_MENSAL_LIMITE:
        return "critical"
    if total_km > KM_MENSAL_ALTO:
        return "high"
    return "medium"


def _days_until(deadline: date | datetime, today: date) -> int:
    if isinstance(deadline, datetime):
        deadline = deadline.date()
    return (deadline - today).days


def _fmt_int(value: float) -> str:
    """Brazilian thousands grouping: ``3000`` → ``"3.000"``."""
    return f"{round(value):,}".replace(",", ".")


def _fmt_brl(value: Any) -> str:
    """Brazilian currency digits: ``1234.5`` → ``"1.234,50"``."""
    text = f"{float(value or 0):,.2f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def _fmt_month(value: date | None) -> str:
    return value.strftime("%Y-%m") if value else "-"


def _shift_months(day: date, months: int) -> date:
    """Move *day* by *months* calendar months, clamping the day of month."""
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def _plural_aditivos(count: int) -> str:
    if count == 0:
        return ""
    return f" ({count} aditivo{'s' if count > 1 else ''})"


def _contract_label(contract: Contract | None) -> str:
    if contract is None:
        return ""
    return f" ({contract.number} - {contract.client_name})"


def _make_alert(
    *,
    alert_id: str,
    severity: str,
    category: str,
    title: str,
    description: str,
    suggestion: str,
    entity_id: int,
    entity_type: str,
    detected_at: datetime,
) -> SystemAlert:
    return SystemAlert(
        id=alert_id,
        severity=severity,
        category=category,
        title=title,
        description=description,
        suggestion=suggestion,
        detected_at=detected_at,
        entity_id=entity_id,
        entity_type=entity_type,
    )


def _latest_amendments(db: Session) -> dict[int, tuple[ContractAmendment, int]]:
    """Map contract id → (amendment with highest number, amendment count)."""
    latest: dict[int, tuple[ContractAmendment, int]] = {}
    for amendment in db.query(ContractAmendment).all():
        current = latest.get(amendment.contract_id)
        if current is None:
            latest[amendment.contract_id] = (amendment, 1)
            continue
        best, count = current
        if amendment.amendment_number > best.amendment_number:
            best = amendment
        latest[amendment.contract_id] = (best, count + 1)
    return latest


# ---------------------------------------------------------------------------
# Alert engine
# ---------------------------------------------------------------------------


def compute_alerts(db: Session, today: date | None = None) -> list[SystemAlert]:
    """Evaluate every alert rule against the current database state.

    Args:
        db: Active SQLAlchemy session.
        today: Reference date; defaults to the current local date.

    Returns:
        Alerts stable-sorted by severity rank (critical first).
    """
    today = today or date.today()
    detected_at = datetime.now()
    alerts: list[SystemAlert] = []

    rules: list[tuple[str, Callable[..., list[SystemAlert]]]] = [
        ("contract expiration", _rule_contratos),
        ("amendment expiration", _rule_aditivos),
        ("calibration expiration", _rule_afericoes),
        ("pending invoices", _rule_faturas),
        ("low inventory", _rule_estoque),
        ("equipment maintenance", _rule_equipamento_manutencao),
        ("energy bills due", _rule_contas_energia),
        ("internet bills due", _rule_contas_internet),
        ("monthly mileage", _rule_quilometragem),
        ("energy value anomaly", _rule_anomalia_energia),
        ("internet value anomaly", _rule_anomalia_internet),
        ("missing energy bills", _rule_energia_sem_fatura),
        ("missing internet bills", _rule_internet_sem_fatura),
        ("equipment without calibration", _rule_equipamento_sem_afericao),
        ("contracts without invoices", _rule_contrato_sem_fatura),
    ]

    for name, rule in rules:
        try:
            found = rule(db, today, detected_at, alerts)
        except Exception:
            logger.exception("compute_alerts: error evaluating %s rule", name)
            continue
        logger.debug("compute_alerts: %s rule produced %d alerts", name, len(found))
        alerts.extend(found)

    alerts.sort(key=lambda alert: SEVERITY_ORDER[alert.severity])
    logger.info("compute_alerts: %d alerts for %s", len(alerts), today.isoformat())
    return alerts


# ---------------------------------------------------------------------------
# Rule implementations (private)
#
# Every rule receives (db, today, detected_at, alerts_so_far) and returns
# the new alerts; only the amendment rule reads ``alerts_so_far``.
# ---------------------------------------------------------------------------


def _rule_contratos(
    db: Session, today: date, detected_at: datetime, _: list[SystemAlert]
) -> list[SystemAlert]:
    """Rule 1 — active contracts whose effective end date is ≤ 60 days away."""
    amendments = _latest_amendments(db)
    contracts = (
        db.query(Contract)
        .filter(Contract.status == "active", Contract.end_date.isnot(None))
        .order_by(Contract.id)
        .all()
    )

    found: list[SystemAlert] = []
    for contract in contracts:
        latest, amendment_count = amendments.get(contract.id, (None, 0))
        end_date = (latest.end_date if latest is not None else None) or contract.end_date
        days = _days_until(end_date, today)
        if days > DIAS_ALERTA_CONTRATO:
            continue

        info = _plural_aditivos(amendment_count)
        expired = days < 0
        if expired:
            description = (
                f"O contrato {contract.number} - {contract.client_name}{info} "
                f"venceu há {abs(days)} dias."
            )
            suggestion = (
                "Renovar contrato com novo aditivo ou encerrar formalmente."
                if amendment_count
                else "Renovar contrato imediatamente ou encerrar formalmente."
            )
        else:
            description = (
                f"O contrato {contract.number} - {contract.client_name}{info} "
                f"vence em {days} dias."
            )
            suggestion = (
                "Iniciar processo de renovação ou novo aditivo."
                if amendment_count
                else "Iniciar processo de renovação ou negociação."
            )

        found.append(
            _make_alert(
                alert_id=f"contract-{contract.id}",
                severity=_severity_for_days(days),
                category="contracts",
                title="Contrato Vencido" if expired else "Contrato Próximo do Vencimento",
                description=description,
                suggestion=suggestion,
                entity_id=contract.id,
                entity_type="contracts",
                detected_at=detected_at,
            )
        )
    return found


def _rule_aditivos(
    db: Session, today: date, detected_at: datetime, alerts: list[SystemAlert]
) -> list[SystemAlert]:
    """Rule 2 — latest amendment ending within 90 days, when rule 1 is silent."""
    already_alerted = {alert.id for alert in alerts}
    contracts = {
        contract.id: contract
        for contract in db.query(Contract)
        .filter(Contract.status == "active", Contract.end_date.isnot(None))
        .all()
    }

    found: list[SystemAlert] = []
    for contract_id, (latest, _) in sorted(_latest_amendments(db).items()):
        contract = contracts.get(contract_id)
        if contract is None or latest.end_date is None:
            continue
        days = _days_until(latest.end_date, today)
        if not 0 < days <= DIAS_ALERTA_ADITIVO:
            continue
        if f"contract-{contract_id}" in already_alerted:
            continue

        found.append(
            _make_alert(
                alert_id=f"amendment-{latest.id}",
                severity="high" if days <= DIAS_ALERTA_ADITIVO_ALTO else "medium",
                category="contracts",
                title="Aditivo de Contrato Próximo do Vencimento",
                description=(
                    f"O aditivo #{latest.amendment_number} do contrato {contract.number} - "
                    f"{contract.client_name} vence em {days} dias."
                ),
                suggestion="Iniciar processo de renovação ou negociação de novo aditivo.",
                entity_id=contract_id,
                entity_type="contracts",
                detected_at=detected_at,
            )
        )
    return found


def _rule_afericoes(
    db: Session, today: date, detected_at: datetime, _: list[SystemAlert]
) -> list[SystemAlert]:
    """Rule 3 — valid calibrations expiring within 60 days (or already expired)."""
    calibrations = (
        db.query(Calibration)
        .filter(Calibration.status == "valid", Calibration.expiration_date.isnot(None))
        .order_by(Calibration.id)
        .all()
    )

    found: list[SystemAlert] = []
    for calibration in calibrations:
        days = _days_until(calibration.expiration_date, today)
        if days > DIAS_ALERTA_AFERICAO:
            continue
        serial = (
            calibration.equipment.serial_number
            if calibration.equipment is not None
            else calibration.equipment_id
        )
        expired = days < 0
        found.append(
            _make_alert(
                alert_id=f"calibration-{calibration.id}",
                severity=_severity_for_days(days),
                category="calibrations",
                title="Aferição Vencida" if expired else "Aferição Próxima do Vencimento",
                description=(
                    f"A aferição do equipamento {serial} venceu há {abs(days)} dias."
                    if expired
                    else f"A aferição do equipamento {serial} vence em {days} dias."
                ),
                suggestion=(
                    "Agendar aferição urgente. Equipamento pode estar inválido para uso."
                    if expired
                    else "Agendar aferição preventiva."
                ),
                entity_id=calibration.id,
                entity_type="calibrations",
                detected_at=detected_at,
            )
        )
    return found


def _rule_faturas(
    db: Session, today: date, detected_at: datetime, _: list[SystemAlert]
) -> list[SystemAlert]:
    """Rule 4 — pending invoices due within 15 days (or overdue)."""
    invoices = (
        db.query(Invoice)
        .filter(Invoice.status == "pending", Invoice.due_date.isnot(None))
        .order_by(Invoice.id)
        .all()
    )

    found: list[SystemAlert] = []
    for invoice in invoices:
        days = _days_until(invoice.due_date, today)
        if days > DIAS_ALERTA_FATURA:
            continue
        client = invoice.contract.client_name if invoice.contract is not None else "Cliente"
        overdue = days < 0
        found.append(
            _make_alert(
                alert_id=f"invoice-{invoice.id}",
                severity=_severity_for_days(days),
                category="invoices",
                title="Fatura Vencida" if overdue else "Fatura Próxima do Vencimento",
                description=(
                    f"A fatura {invoice.number} de {client} (R$ {_fmt_brl(invoice.value)}) "
                    f"venceu há {abs(days)} dias."
                    if overdue
                    else f"A fatura {invoice.number} de {client} vence em {days} dias."
                ),
                suggestion=(
                    "Entrar em contato com cliente para cobrança."
                    if overdue
                    else "Enviar lembrete de vencimento ao cliente."
                ),
                entity_id=invoice.id,
                entity_type="invoices",
                detected_at=detected_at,
            )
        )
    return found


def _rule_estoque(
    db: Session, today: date, detected_at: datetime, _: list[SystemAlert]
) -> list[SystemAlert]:
    """Rule 5 — items at or below their reorder point."""
    items = db.query(InventoryItem).order_by(InventoryItem.id).all()

    found: list[SystemAlert] = []
    for item in items:
        if not item.min_quantity or item.quantity is None:
            continue
        if item.quantity > item.min_quantity:
            continue
        ratio = item.quantity / item.min_quantity
        if ratio == 0:
            severity = "critical"
        elif ratio <= 0.5:
            severity = "high"
        else:
            severity = "medium"
        empty = item.quantity == 0
        found.append(
            _make_alert(
                alert_id=f"inventory-{item.id}",
                severity=severity,
                category="inventory",
                title="Estoque Zerado" if empty else "Estoque Baixo",
                description=(
                    f'O item "{item.component_name}" está com estoque zerado.'
                    if empty
                    else (
                        f'O item "{item.component_name}" está com apenas {item.quantity} '
                        f"unidades (mínimo: {item.min_quantity})."
                    )
                ),
                suggestion="Solicitar reposição de estoque.",
                entity_id=item.id,
                entity_type="inventory",
                detected_at=detected_at,
            )
        )
    return found


def _rule_equipamento_manutencao(
    db: Session, today: date, detected_at: datetime, _: list[SystemAlert]
) -> list[SystemAlert]:
    """Rule 6 — equipment whose status has been ``maintenance`` for ≥ 7 days."""
    equipment = (
        db.query(Equipment)
        .filter(Equipment.status == "maintenance")
        .order_by(Equipment.id)
        .all()
    )

    found: list[SystemAlert] = []
    for equip in equipment:
        if equip.updated_at is None:
            continue
        days = -_days_until(equip.updated_at, today)
        if days < DIAS_EQUIPAMENTO_MANUTENCAO:
            continue
        found.append(
            _make_alert(
                alert_id=f"equipment-maintenance-{equip.id}",
                severity="high" if days >= DIAS_EQUIPAMENTO_MANUTENCAO_ALTO else "medium",
                category="equipment",
                title="Equipamento em Manutenção Prolongada",
                description=(
                    f"O equipamento {equip.serial_number} está em manutenção há {days} dias."
                ),
                suggestion="Verificar status da manutenção e atualizar situação.",
                entity_id=equip.id,
                entity_type="equipment",
                detected_at=detected_at,
            )
        )
    return found


def _rule_contas_energia(
    db: Session, today: date, detected_at: datetime, _: list[SystemAlert]
) -> list[SystemAlert]:
    """Rule 7 — pending energy bills due within 15 days (or overdue)."""
    bills = (
        db.query(EnergyBill)
        .filter(EnergyBill.status == "pending", EnergyBill.due_date.isnot(None))
        .order_by(EnergyBill.id)
        .all()
    )

    found: list[SystemAlert] = []
    for bill in bills:
        days = _days_until(bill.due_date, today)
        if days > DIAS_ALERTA_CONTA:
            continue
        overdue = days < 0
        found.append(
            _make_alert(
                alert_id=f"energy-{bill.id}",
                severity=_severity_for_days(days),
                category="energy",
                title="Conta de Energia Vencida" if overdue else "Conta de Energia a Vencer",
                description=(
                    f"A conta de energia da UC {bill.consumer_unit} "
                    f"({_fmt_month(bill.reference_month)}) venceu há {abs(days)} dias."
                    if overdue
                    else f"A conta de energia da UC {bill.consumer_unit} vence em {days} dias."
                ),
                suggestion="Efetuar pagamento para evitar corte de energia.",
                entity_id=bill.id,
                entity_type="energy_bills",
                detected_at=detected_at,
            )
        )
    return found


def _rule_contas_internet(
    db: Session, today: date, detected_at: datetime, _: list[SystemAlert]
) -> list[SystemAlert]:
    """Rule 8 — pending internet bills due within 15 days (or overdue)."""
    bills = (
        db.query(InternetBill)
        .filter(InternetBill.status == "pending", InternetBill.due_date.isnot(None))
        .order_by(InternetBill.id)
        .all()
    )

    found: list[SystemAlert] = []
    for bill in bills:
        days = _days_until(bill.due_date, today)
        if days > DIAS_ALERTA_CONTA:
            continue
        overdue = days < 0
        found.append(
            _make_alert(
                alert_id=f"internet-{bill.id}",
                severity=_severity_for_days(days),
                category="internet",
                title="Conta de Internet Vencida" if overdue else "Conta de Internet a Vencer",
                description=(
                    f"A conta de internet {bill.provider} "
                    f"({_fmt_month(bill.reference_month)}) venceu há {abs(days)} dias."
                    if overdue
                    else f"A conta de internet {bill.provider} vence em {days} dias."
                ),
                suggestion="Efetuar pagamento para evitar suspensão do serviço.",
                entity_id=bill.id,
                entity_type="internet_bills",
                detected_at=detected_at,
            )
        )
    return found


def _rule_quilometragem(
    db: Session, today: date, detected_at: datetime, _: list[SystemAlert]
) -> list[SystemAlert]:
    """Rule 9 — vehicles whose driven km this month reached the warning level."""
    month_start = today.replace(day=1)
    month_end = today.replace(day=calendar.monthrange(today.year, today.month)[1])
    records = (
        db.query(MileageRecord)
        .filter(MileageRecord.date >= month_start, MileageRecord.date <= month_end)
        .order_by(MileageRecord.id)
        .all()
    )

    totals: dict[int, float] = defaultdict(float)
    for record in records:
        if record.vehicle_id is None:
            continue
        totals[record.vehicle_id] += (record.final_km or 0) - (record.initial_km or 0)

    vehicles = {
        vehicle.id: vehicle
        for vehicle in db.query(Vehicle).filter(Vehicle.id.in_(list(totals))).all()
    } if totals else {}

    found: list[SystemAlert] = []
    for vehicle_id, total_km in totals.items():
        if total_km < KM_MENSAL_AVISO:
            continue
        vehicle = vehicles.get(vehicle_id)
        plate = vehicle.plate if vehicle is not None else "N/A"
        brand = (vehicle.brand or "") if vehicle is not None else ""
        model = (vehicle.model or "") if vehicle is not None else ""
        exceeded = total_km >= KM_MENSAL_LIMITE
        remaining = KM_MENSAL_LIMITE - total_km

        found.append(
            _make_alert(
                alert_id=f"mileage-{vehicle_id}",
                severity=_severity_for_mileage(total_km),
                category="mileage",
                title="Limite de Km Mensal Excedido" if exceeded else "Km Mensal Próximo do Limite",
                description=(
                    f"O veículo {plate} ({brand} {model}) excedeu o limite mensal de "
                    f"{_fmt_int(KM_MENSAL_LIMITE)} km. Total: {_fmt_int(total_km)} km."
                    if exceeded
                    else (
                        f"O veículo {plate} ({brand} {model}) atingiu {_fmt_int(total_km)} km "
                        f"este mês. Restam {_fmt_int(remaining)} km do limite mensal."
                    )
                ),
                suggestion=(
                    "Verificar necessidade de uso e avaliar redistribuição de veículos."
                    if exceeded
                    else "Monitorar uso do veículo para não exceder o limite mensal."
                ),
                entity_id=vehicle_id,
                entity_type="vehicles",
                detected_at=detected_at,
            )
        )
    return found


def _value_anomaly(values: list[float]) -> tuple[float, float] | None:
    """Compare the most recent value with the mean of the older ones.

    Args:
        values: Bill values, most recent first.

    Returns:
        ``(deviation, average)`` when the deviation exceeds the anomaly
        threshold, otherwise ``None``.
    """
    if len(values) < ANOMALIA_MIN_CONTAS:
        return None
    historical = values[1:]
    average = sum(historical) / len(historical)
    if average <= 0:
        return None
    deviation = abs(values[0] - average) / average
    if deviation <= ANOMALIA_DESVIO:
        return None
    return deviation, average


def _rule_anomalia_energia(
    db: Session, today: date, detected_at: datetime, _: list[SystemAlert]
) -> list[SystemAlert]:
    """Rule 10 — latest energy bill of a unit far from the unit's average."""
    bills = (
        db.query(EnergyBill)
        .order_by(EnergyBill.reference_month.desc(), EnergyBill.id.desc())
        .all()
    )
    by_unit: dict[str, list[EnergyBill]] = defaultdict(list)
    for bill in bills:
        if not bill.consumer_unit or bill.value is None:
            continue
        by_unit[bill.consumer_unit].append(bill)

    found: list[SystemAlert] = []
    for unit, unit_bills in by_unit.items():
        anomaly = _value_anomaly([float(b.value) for b in unit_bills])
        if anomaly is None:
            continue
        deviation, average = anomaly
        recent = unit_bills[0]
        higher = float(recent.value) > average
        found.append(
            _make_alert(
                alert_id=f"energy-anomaly-{recent.id}",
                severity="high" if deviation > ANOMALIA_DESVIO_ALTO else "medium",
                category="energy",
                title=(
                    "Conta de Energia Acima da Média"
                    if higher
                    else "Conta de Energia Abaixo da Média"
                ),
                description=(
                    f"A UC {unit} ({_fmt_month(recent.reference_month)}) teve valor de "
                    f"R$ {_fmt_brl(recent.value)}, {round(deviation * 100)}% "
                    f"{'acima' if higher else 'abaixo'} da média histórica "
                    f"(R$ {_fmt_brl(average)})."
                ),
                suggestion=(
                    "Verificar possíveis causas: aumento de consumo, vazamento, "
                    "furto de energia ou erro de leitura."
                    if higher
                    else "Verificar se houve redução de operação, desligamento de "
                    "equipamentos ou possível erro de leitura."
                ),
                entity_id=recent.id,
                entity_type="energy_bills",
                detected_at=detected_at,
            )
        )
    return found


def _rule_anomalia_internet(
    db: Session, today: date, detected_at: datetime, _: list[SystemAlert]
) -> list[SystemAlert]:
    """Rule 11 — latest internet bill of a connection far from its average.

    Bills without a connection are grouped by provider name.
    """
    bills = (
        db.query(InternetBill)
        .order_by(InternetBill.reference_month.desc(), InternetBill.id.desc())
        .all()
    )
    by_key: dict[Any, list[InternetBill]] = defaultdict(list)
    for bill in bills:
        key = bill.connection_id or bill.provider
        if not key or bill.value is None:
            continue
        by_key[key].append(bill)

    found: list[SystemAlert] = []
    for key_bills in by_key.values():
        anomaly = _value_anomaly([float(b.value) for b in key_bills])
        if anomaly is None:
            continue
        deviation, average = anomaly
        recent = key_bills[0]
        higher = float(recent.value) > average
        found.append(
            _make_alert(
                alert_id=f"internet-anomaly-{recent.id}",
                severity="high" if deviation > ANOMALIA_DESVIO_ALTO else "medium",
                category="internet",
                title=(
                    "Conta de Internet Acima da Média"
                    if higher
                    else "Conta de Internet Abaixo da Média"
                ),
                description=(
                    f"A conta {key_bills[0].provider} ({_fmt_month(recent.reference_month)}) "
                    f"teve valor de R$ {_fmt_brl(recent.value)}, {round(deviation * 100)}% "
                    f"{'acima' if higher else 'abaixo'} da média histórica "
                    f"(R$ {_fmt_brl(average)})."
                ),
                suggestion=(
                    "Verificar se houve mudança de plano, cobrança adicional ou erro na fatura."
                    if higher
                    else "Verificar se há créditos aplicados ou possível erro de faturamento."
                ),
                entity_id=recent.id,
                entity_type="internet_bills",
                detected_at=detected_at,
            )
        )
    return found


def _billed_months(rows: list[tuple[Any, date | None]]) -> set[tuple[Any, int, int]]:
    return {(key, month.year, month.month) for key, month in rows if month is not None}


def _rule_energia_sem_fatura(
    db: Session, today: date, detected_at: datetime, _: list[SystemAlert]
) -> list[SystemAlert]:
    """Rule 12a — consumer units missing last month's (or this month's) bill."""
    units = db.query(EnergyConsumerUnit).order_by(EnergyConsumerUnit.id).all()
    if not units:
        return []

    current = today.replace(day=1)
    previous = _shift_months(current, -1)
    billed = _billed_months(
        db.query(EnergyBill.consumer_unit, EnergyBill.reference_month)
        .filter(EnergyBill.reference_month >= previous)
        .all()
    )

    found: list[SystemAlert] = []
    for unit in units:
        label = _contract_label(unit.contract)
        if (unit.consumer_unit, previous.year, previous.month) not in billed:
            found.append(
                _make_alert(
                    alert_id=f"missing-energy-prev-{unit.id}",
                    severity="high",
                    category="energy",
                    title="Fatura de Energia Não Lançada",
                    description=(
                        f"A UC {unit.consumer_unit}{label} não possui fatura lançada "
                        f"para {_fmt_month(previous)}."
                    ),
                    suggestion="Verificar se a fatura foi recebida e lançar no sistema.",
                    entity_id=unit.id,
                    entity_type="energy_consumer_units",
                    detected_at=detected_at,
                )
            )
        if (
            today.day > DIA_LIMITE_CONTA_MES_ATUAL
            and (unit.consumer_unit, current.year, current.month) not in billed
        ):
            found.append(
                _make_alert(
                    alert_id=f"missing-energy-curr-{unit.id}",
                    severity="medium",
                    category="energy",
                    title="Fatura de Energia Pendente",
                    description=(
                        f"A UC {unit.consumer_unit}{label} ainda não possui fatura "
                        f"para {_fmt_month(current)}."
                    ),
                    suggestion="Verificar se a fatura já chegou e lançar quando disponível.",
                    entity_id=unit.id,
                    entity_type="energy_consumer_units",
                    detected_at=detected_at,
                )
            )
    return found


def _rule_internet_sem_fatura(
    db: Session, today: date, detected_at: datetime, _: list[SystemAlert]
) -> list[SystemAlert]:
    """Rule 12b — internet connections missing last month's (or this month's) bill."""
    connections = db.query(InternetConnection).order_by(InternetConnection.id).all()
    if not connections:
        return []

    current = today.replace(day=1)
    previous = _shift_months(current, -1)
    billed = _billed_months(
        db.query(InternetBill.connection_id, InternetBill.reference_month)
        .filter(
            InternetBill.connection_id.isnot(None),
            InternetBill.reference_month >= previous,
        )
        .all()
    )

    found: list[SystemAlert] = []
    for conn in connections:
        label = f" ({conn.provider})" if conn.provider else ""
        if conn.contract is not None:
            label += f" - {conn.contract.client_name}"
        if (conn.id, previous.year, previous.month) not in billed:
            found.append(
                _make_alert(
                    alert_id=f"missing-internet-prev-{conn.id}",
                    severity="high",
                    category="internet",
                    title="Fatura de Internet Não Lançada",
                    description=(
                        f"A conexão {conn.serial_number}{label} não possui fatura lançada "
                        f"para {_fmt_month(previous)}."
                    ),
                    suggestion="Verificar se a fatura foi recebida e lançar no sistema.",
                    entity_id=conn.id,
                    entity_type="internet_connections",
                    detected_at=detected_at,
                )
            )
        if (
            today.day > DIA_LIMITE_CONTA_MES_ATUAL
            and (conn.id, current.year, current.month) not in billed
        ):
            found.append(
                _make_alert(
                    alert_id=f"missing-internet-curr-{conn.id}",
                    severity="medium",
                    category="internet",
                    title="Fatura de Internet Pendente",
                    description=(
                        f"A conexão {conn.serial_number}{label} ainda não possui fatura "
                        f"para {_fmt_month(current)}."
                    ),
                    suggestion="Verificar se a fatura já chegou e lançar quando disponível.",
                    entity_id=conn.id,
                    entity_type="internet_connections",
                    detected_at=detected_at,
                )
            )
    return found


def _rule_equipamento_sem_afericao(
    db: Session, today: date, detected_at: datetime, _: list[SystemAlert]
) -> list[SystemAlert]:
    """Rule 13 — active equipment with no ``valid`` calibration on file."""
    calibrated = {
        row.equipment_id
        for row in db.query(Calibration.equipment_id).filter(Calibration.status == "valid")
    }
    equipment = (
        db.query(Equipment).filter(Equipment.status == "active").order_by(Equipment.id).all()
    )
    contracts = {contract.id: contract for contract in db.query(Contract).all()}

    found: list[SystemAlert] = []
    for equip in equipment:
        if equip.id in calibrated:
            continue
        label = _contract_label(contracts.get(equip.contract_id))
        found.append(
            _make_alert(
                alert_id=f"no-calibration-{equip.id}",
                severity="high",
                category="calibrations",
                title="Equipamento Sem Aferição Válida",
                description=(
                    f"O equipamento {equip.serial_number}{label} não possui aferição "
                    "válida cadastrada."
                ),
                suggestion="Cadastrar a aferição vigente ou verificar status do equipamento.",
                entity_id=equip.id,
                entity_type="equipment",
                detected_at=detected_at,
            )
        )
    return found


def _rule_contrato_sem_fatura(
    db: Session, today: date, detected_at: datetime, _: list[SystemAlert]
) -> list[SystemAlert]:
    """Rule 14 — active contracts with no invoice issued in the last 2 months."""
    since = _shift_months(today, -MESES_SEM_FATURA)
    invoiced = {
        row.contract_id
        for row in db.query(Invoice.contract_id).filter(Invoice.issue_date >= since)
    }
    contracts = (
        db.query(Contract).filter(Contract.status == "active").order_by(Contract.id).all()
    )

    found: list[SystemAlert] = []
    for contract in contracts:
        if contract.id in invoiced:
            continue
        found.append(
            _make_alert(
                alert_id=f"no-invoice-{contract.id}",
                severity="medium",
                category="invoices",
                title="Contrato Sem Faturamento Recente",
                description=(
                    f"O contrato {contract.number} - {contract.client_name} não possui "
                    f"fatura emitida nos últimos {MESES_SEM_FATURA} meses."
                ),
                suggestion="Verificar se há pendência de faturamento ou se o contrato está pausado.",
                entity_id=contract.id,
                entity_type="contracts",
                detected_at=detected_at,
            )
        )
    return found


# ---------------------------------------------------------------------------
# Grouping, counting and filtering
# ---------------------------------------------------------------------------


def filter_alerts(
    alerts: list[SystemAlert],
    categoria: str | None = None,
    severidade: str | None = None,
) -> list[SystemAlert]:
    """Keep alerts matching the optional category and severity."""
    return [
        alert
        for alert in alerts
        if (categoria is None or alert.category == categoria)
        and (severidade is None or alert.severity == severidade)
    ]


def group_by_category(alerts: list[SystemAlert]) -> dict[str, list[SystemAlert]]:
    """Group alerts by category, preserving their order inside each group."""
    groups: dict[str, list[SystemAlert]] = {}
    for alert in alerts:
        groups.setdefault(alert.category, []).append(alert)
    return groups


def count_by_severity(alerts: list[SystemAlert]) -> dict[str, int]:
    """Return ``{critical, high, medium, low, total}`` counts."""
    counts = {severity: 0 for severity in SEVERITIES}
    for alert in alerts:
        counts[alert.severity] += 1
    counts["total"] = len(alerts)
    return counts


def get_resumen(db: Session, today: date | None = None) -> AlertSummary:
    """Severity counts plus per-category counts for the notification badge."""
    alerts = compute_alerts(db, today)
    by_category = {
        category: len(items) for category, items in group_by_category(alerts).items()
    }
    return AlertSummary(**count_by_severity(alerts), by_category=by_category)
