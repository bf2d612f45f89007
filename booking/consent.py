"""Informed consent shown before a reservation is processed."""
from datetime import datetime
from typing import Optional

STATUS_ACCEPTED = "ACEPTADO"
REJECTED_MESSAGE = "Debes aceptar el consentimiento informado para realizar la reserva"

CONSENT_BODY = """\
Comprendo que el Breathwork (Respiración Consciente Circular Conectada) puede generar intensas experiencias físicas y emocionales, que pueden incluir:
• Mareos, náuseas, desmayos
• Hormigueo, calambres, espasmos musculares
• Angustia emocional, recuerdos traumáticos, alteraciones de conciencia

Por lo tanto, debo informar a mi terapeuta/facilitador sobre cualquier condición médica, psicológica o emocional que pueda verse agravada por la práctica.

DECLARO que NO tengo ninguna de las siguientes condiciones contraindicadas, o que, en caso de tenerlas, informé a mi facilitadora para evaluar mi participación:
• Embarazo
• Enfermedades cardiovasculares
• Presión arterial alta o baja no controlada
• Historial de aneurismas, convulsiones o ataques
• Epilepsia
• Asma severa o enfermedad pulmonar
• Glaucoma
• Desprendimiento de retina
• Osteoporosis o lesiones físicas
• Cirugías o enfermedades recientes
• Antecedentes de enfermedad mental, trastornos de personalidad, psicosis o tendencias suicidas

RECONOZCO QUE:
• El Breathwork NO es un sustituto de atención médica, psicológica o psiquiátrica profesional
• Soy responsable de mi participación y seguridad
• Puedo detener la sesión en cualquier momento si siento molestia o malestar
• Eximo de responsabilidad al facilitador por cualquier consecuencia derivada de mi participación voluntaria"""


def build_consent_text(accepted_at: Optional[datetime] = None) -> str:
    """
    Build the accepted-consent record attached to a reservation.

    Args:
        accepted_at: When the participant accepted (defaults to now)

    Returns:
        Consent text stamped with the acceptance date
    """
    accepted_at = accepted_at or datetime.now()
    return (
        "CONSENTIMIENTO INFORMADO - ACEPTADO\n\n"
        "El participante ha leído y aceptado el siguiente consentimiento:\n\n"
        f"{CONSENT_BODY}\n\n"
        f"Fecha de aceptación: {accepted_at.strftime('%d-%m-%Y, %H:%M:%S')}"
    )
