"""First-run dataset loaded into an empty store.

All people, IDs and accounts below are fictional.
"""

from typing import List

from src.models import AppUser, ProductionEvent, StaffMember, UserRole

BOOTSTRAP_ADMIN = {
    "id": "admin-001",
    "username": "administracion",
    "password": "changeme",
    "name": "Administrador Principal",
    "role": UserRole.ADMIN,
}

_STAFF = [
    {"id": "st-001", "firstName": "Lucía", "lastName": "Ferrer Ortega", "dni": "00000001R",
     "role": "Realizador", "paymentType": "Autonomo", "province": "Sevilla",
     "phone": "600000001", "email": "lucia.ferrer@example.com"},
    {"id": "st-002", "firstName": "Mario", "lastName": "Campos Vidal", "dni": "00000002W",
     "socialSecurityNumber": "410000000002", "role": "Aux. Sonido",
     "paymentType": "Alta Seg. Social", "province": "Sevilla", "phone": "600000002"},
    {"id": "st-003", "firstName": "Elena", "lastName": "Soto Marín", "dni": "00000003A",
     "role": "Ope. Camara", "paymentType": "Cooperativa", "province": "Cádiz",
     "email": "elena.soto@example.com"},
    {"id": "st-004", "firstName": "Pablo", "lastName": "Herrera Rey", "dni": "00000004G",
     "role": "Repeticiones", "paymentType": "Empresa", "province": "Huelva"},
    {"id": "st-005", "firstName": "Nuria", "lastName": "Gil Prieto", "dni": "00000005M",
     "socialSecurityNumber": "410000000005", "role": "Auxiliar",
     "paymentType": "Alta Seg. Social", "province": "Sevilla"},
    {"id": "st-006", "firstName": "Javier", "lastName": "Luna Serrano", "dni": "00000006Y",
     "role": "Jefe Técnico", "paymentType": "Plantilla", "province": "Sevilla"},
]

_EVENTS = [
    {
        "id": "ev-001",
        "title": "Gala de Premios Anual",
        "date": "2024-03-15",
        "shifts": [
            {"id": "sh-001", "role": "Jefe Técnico", "personName": "Javier Luna Serrano",
             "dni": "00000006Y", "agreedSalary": 0, "paymentType": "Plantilla",
             "schedule": "Completa"},
            {"id": "sh-002", "role": "Aux. Sonido", "personName": "Mario Campos Vidal",
             "dni": "00000002W", "agreedSalary": 300, "paymentType": "Alta Seg. Social",
             "schedule": "Completa", "socialSecurityStartDate": "2024-03-14",
             "socialSecurityEndDate": "2024-03-16"},
            {"id": "sh-003", "role": "Realizador", "personName": "Lucía Ferrer Ortega",
             "dni": "00000001R", "agreedSalary": 250, "paymentType": "Autonomo",
             "schedule": "Completa"},
        ],
    },
    {
        "id": "ev-002",
        "title": "Concierto Benéfico",
        "date": "2024-04-20",
        "shifts": [
            {"id": "sh-004", "role": "Ope. Camara", "personName": "Elena Soto Marín",
             "dni": "00000003A", "agreedSalary": 180, "paymentType": "Cooperativa",
             "schedule": "Media", "invoiceNumber": "F-2024-031",
             "totalInvoiceAmount": 217.8},
            {"id": "sh-005", "role": "Repeticiones", "personName": "Pablo Herrera Rey",
             "dni": "00000004G", "agreedSalary": 220, "paymentType": "Empresa",
             "schedule": "Completa"},
            {"id": "sh-006", "role": "Auxiliar", "personName": "Nuria Gil Prieto",
             "dni": "00000005M", "agreedSalary": 120, "paymentType": "Alta Seg. Social",
             "schedule": "Media", "socialSecurityStartDate": "2024-04-20",
             "socialSecurityEndDate": "2024-04-20"},
        ],
    },
]


def default_users() -> List[AppUser]:
    """The bootstrap administrator account."""
    return [AppUser(**BOOTSTRAP_ADMIN)]


def default_staff() -> List[StaffMember]:
    return [StaffMember.model_validate(record) for record in _STAFF]


def default_events() -> List[ProductionEvent]:
    """Sample events, with shifts already stamped with their event id."""
    return [
        ProductionEvent.model_validate(record).with_stamped_shifts()
        for record in _EVENTS
    ]
