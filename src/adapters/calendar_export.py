"""Exportación de la cita a calendario (.ics).

Por qué iCalendar:
- Cualquier app de calendario lo importa sin depender de cuentas/APIs.
- El Core solo aporta servicio y tipo de negocio; la duración es fija (1h).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

APPOINTMENT_DURATION = timedelta(hours=1)


def _format_utc(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def parse_start_time(value: str) -> datetime:
    """Parsea ISO 8601 (p.ej. '2025-03-01T14:30'); sin zona se asume hora local."""

    start = datetime.fromisoformat(value.strip())
    if start.tzinfo is None:
        start = start.astimezone()
    return start


def build_appointment_ics(*, service: str, business_type: str, start: datetime) -> str:
    end = start + APPOINTMENT_DURATION
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "BEGIN:VEVENT",
        f"DTSTART:{_format_utc(start)}",
        f"DTEND:{_format_utc(end)}",
        f"SUMMARY:{service} Appointment",
        f"DESCRIPTION:{business_type} - {service}",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(lines) + "\r\n"


def export_appointment_ics(*, service: str, business_type: str, start: datetime, output_path: Path) -> Path:
    """Escribe el .ics de la cita y devuelve la ruta."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    content = build_appointment_ics(service=service, business_type=business_type, start=start)
    with output_path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(content)
    return output_path
