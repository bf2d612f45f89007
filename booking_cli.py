#!/usr/bin/env python3
"""Terminal client for the AMAUNA booking system.

Usage:
    python booking_cli.py

Features:
- Books against the backend when it is running, locally otherwise
- Informed consent before every reservation
- List, delete and CSV export of reservations
"""
import sys
from typing import Callable, Dict, List, Optional

from booking import config
from booking.consent import CONSENT_BODY, REJECTED_MESSAGE
from booking.logging_config import setup_structured_logging
from booking.models import AppointmentForm
from booking.sync import BookingClient, NothingToExport

InputFn = Callable[[str], str]


# ANSI color codes
class Colors:
    BLUE = '\033[94m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    RESET = '\033[0m'
    BOLD = '\033[1m'


def print_colored(text: str, color: str = Colors.RESET, end: str = "\n"):
    """Print colored text."""
    print(f"{color}{text}{Colors.RESET}", end=end)


def ask_yes_no(question: str, input_fn: InputFn = input) -> bool:
    answer = input_fn(f"{question} [s/N] ").strip().lower()
    return answer in ("s", "si", "sí", "y", "yes")


def format_appointment(apt: Dict) -> str:
    """One reservation as shown in the list."""
    contact = apt.get("email", "")
    if apt.get("phone"):
        contact += f" · {apt['phone']}"
    return (
        f"[{apt.get('id', '-')}] {apt.get('name', '')}\n"
        f"    {apt.get('service', '')} — {apt.get('date', '')} {apt.get('time', '')}\n"
        f"    {contact}"
    )


def show_appointments(appointments: List[Dict]):
    if not appointments:
        print_colored("No hay reservas. Sé el primero en agendar.", Colors.YELLOW)
        return
    for apt in appointments:
        print(format_appointment(apt))


def prompt_form(input_fn: InputFn = input) -> AppointmentForm:
    """Collect the booking form fields."""
    print_colored("Servicios disponibles:", Colors.YELLOW)
    for i, service in enumerate(config.SERVICES, start=1):
        print(f"  {i}. {service}")

    name = input_fn("Nombre: ")
    email = input_fn("Email: ")
    phone = input_fn("Teléfono (opcional): ")
    choice = input_fn("Servicio (número): ").strip()
    date = input_fn("Fecha (AAAA-MM-DD): ").strip()
    time_str = input_fn("Hora (HH:MM, 08:00 - 20:00): ").strip()
    diagnoses = input_fn("Diagnósticos (separados por coma, o NADA): ")

    service = choice
    if choice.isdigit() and 1 <= int(choice) <= len(config.SERVICES):
        service = config.SERVICES[int(choice) - 1]

    return AppointmentForm(
        name=name, email=email, phone=phone, service=service, date=date, time=time_str,
        diagnosticos=diagnoses,
    )


def book(client: BookingClient, input_fn: InputFn = input):
    """Fill the form, accept consent, and submit the reservation."""
    form = prompt_form(input_fn)

    print_colored("\nCONSENTIMIENTO INFORMADO", Colors.BOLD)
    print(CONSENT_BODY)
    if not ask_yes_no("\n¿Aceptas el consentimiento informado?", input_fn):
        print_colored(f"❌ {REJECTED_MESSAGE}", Colors.RED)
        return

    result = client.create_appointment(
        form, confirm=lambda question: ask_yes_no(question, input_fn)
    )
    if result.status == "success":
        print_colored(f"✅ {result.message}", Colors.GREEN)
    elif result.status == "error":
        print_colored(f"❌ {result.message}", Colors.RED)


def handle_command(client: BookingClient, line: str, input_fn: InputFn = input) -> bool:
    """
    Run one command.

    Args:
        client: Booking client
        line: Command line typed by the user
        input_fn: Prompt function (input() by default)

    Returns:
        False when the user asked to quit
    """
    parts = line.strip().split(maxsplit=1)
    if not parts:
        return True
    cmd = parts[0].lower()
    arg: Optional[str] = parts[1].strip() if len(parts) > 1 else None

    if cmd == "/salir":
        print_colored("👋 ¡Hasta pronto!", Colors.YELLOW)
        return False

    elif cmd == "/reservar":
        book(client, input_fn)

    elif cmd == "/lista":
        show_appointments(client.list_appointments())

    elif cmd == "/borrar":
        if not arg:
            print_colored("Uso: /borrar <id>", Colors.YELLOW)
        elif client.delete_appointment(arg):
            print_colored(f"✅ Reserva {arg} borrada", Colors.GREEN)
        else:
            print_colored(f"No existe la reserva {arg}", Colors.YELLOW)

    elif cmd == "/borrar-todo":
        if client.clear_all(confirm=lambda question: ask_yes_no(question, input_fn)):
            print_colored("✅ Reservas borradas", Colors.GREEN)

    elif cmd == "/exportar":
        try:
            path = client.export_csv(arg or config.CSV_FILENAME)
            print_colored(f"✅ Exportado a {path}", Colors.GREEN)
        except NothingToExport as e:
            print_colored(str(e), Colors.YELLOW)

    elif cmd == "/ayuda":
        print_help()

    else:
        print_colored(f"Comando desconocido: {cmd}. Escribe /ayuda", Colors.RED)

    return True


def print_help():
    print_colored("Comandos:", Colors.YELLOW)
    print_colored("  /reservar            - Nueva reserva", Colors.YELLOW)
    print_colored("  /lista               - Ver reservas", Colors.YELLOW)
    print_colored("  /borrar <id>         - Borrar una reserva", Colors.YELLOW)
    print_colored("  /borrar-todo         - Borrar todas las reservas", Colors.YELLOW)
    print_colored(f"  /exportar [archivo]  - Exportar a CSV ({config.CSV_FILENAME})", Colors.YELLOW)
    print_colored("  /salir               - Salir", Colors.YELLOW)


def main():
    """Main interactive loop."""
    setup_structured_logging("WARNING")
    client = BookingClient()

    print_colored("=" * 60, Colors.BLUE)
    print_colored("🧘 AMAUNA - Reservas", Colors.BOLD)
    print_colored("=" * 60, Colors.BLUE)
    if client.backend_available():
        print_colored(f"Servidor: {client.api_base_url}", Colors.YELLOW)
    else:
        print_colored("Servidor no disponible: las reservas se guardan localmente", Colors.YELLOW)
    print()
    print_help()
    print()

    while True:
        try:
            line = input("> ")
        except (KeyboardInterrupt, EOFError):
            print()
            print_colored("👋 ¡Hasta pronto!", Colors.YELLOW)
            break

        if not handle_command(client, line):
            break


if __name__ == "__main__":
    sys.exit(main())
