"""Reference data for the dealership: vehicle taxonomy, synonyms, lender roster, SOAT tariffs"""

from typing import Any, Dict, List

# Official vehicle categories; iteration order is the classifier's tie-break order
CATEGORIES_OFFICIAL: List[str] = [
    "URBANA Y/O TRABAJO",
    "DEPORTIVA",
    "TODOTERRENO",
    "ELECTRICA",
    "PATINETA",
    "MOTOCARRO Y/O MOTOCARGUERO",
    "SEMIAUTOMATICA",
    "AUTOMATICA Y/O SCOOTER",
]

# Informal buyer vocabulary -> official category
SYNONYMS: Dict[str, str] = {
    # Deportiva
    "pistera": "DEPORTIVA",
    "corredora": "DEPORTIVA",
    "carreras": "DEPORTIVA",
    "ninja": "DEPORTIVA",
    "sport": "DEPORTIVA",
    # Urbana / trabajo
    "calle": "URBANA Y/O TRABAJO",
    "trabajo": "URBANA Y/O TRABAJO",
    "mensajera": "URBANA Y/O TRABAJO",
    "domicilio": "URBANA Y/O TRABAJO",
    "economica": "URBANA Y/O TRABAJO",
    "barata": "URBANA Y/O TRABAJO",
    "nkd": "URBANA Y/O TRABAJO",
    # Todoterreno
    "montaña": "TODOTERRENO",
    "trocha": "TODOTERRENO",
    "cross": "TODOTERRENO",
    "enduro": "TODOTERRENO",
    "dobleproposito": "TODOTERRENO",
    # Automatica / scooter
    "scooter": "AUTOMATICA Y/O SCOOTER",
    "motoneta": "AUTOMATICA Y/O SCOOTER",
    "automatica": "AUTOMATICA Y/O SCOOTER",
    "nmax": "AUTOMATICA Y/O SCOOTER",
    "pcx": "AUTOMATICA Y/O SCOOTER",
    # Semiautomatica
    "semiautomatica": "SEMIAUTOMATICA",
    "moped": "SEMIAUTOMATICA",
    "señoritera": "SEMIAUTOMATICA",
    "crypton": "SEMIAUTOMATICA",
    # Motocarro
    "carguero": "MOTOCARRO Y/O MOTOCARGUERO",
    "torito": "MOTOCARRO Y/O MOTOCARGUERO",
    "carro": "MOTOCARRO Y/O MOTOCARGUERO",
    "tresruedas": "MOTOCARRO Y/O MOTOCARGUERO",
    "motocarro": "MOTOCARRO Y/O MOTOCARGUERO",
    # Electrica
    "electrica": "ELECTRICA",
    "bateria": "ELECTRICA",
    "ecologica": "ELECTRICA",
    "starker": "ELECTRICA",
    # Patineta
    "patineta": "PATINETA",
    "scooter-electrica": "PATINETA",
    "monopatin": "PATINETA",
}

# Monthly rates are percentages (2.2 == 2.2% per month)
DEFAULT_LENDERS: List[Dict[str, Any]] = [
    {
        "id": "crediorbe",
        "name": "Crediorbe",
        "monthly_interest_rate": 2.2,
        "min_down_payment_percent": 15,
        "min_age": 18,
        "max_age": 75,
        "accepts_bureau_flagged": True,
        "manual_override": False,
    },
    {
        "id": "banco-de-bogota",
        "name": "Banco de Bogotá",
        "monthly_interest_rate": 1.87,
        "min_down_payment_percent": 10,
        "min_age": 18,
        "max_age": 70,
        "accepts_bureau_flagged": False,
    },
    {
        "id": "brilla",
        "name": "Brilla Gases del Caribe",
        "monthly_interest_rate": 2.05,
        "min_down_payment_percent": 0,
        "min_age": 21,
        "max_age": 70,
        "accepts_bureau_flagged": False,
    },
]

# SOAT tariff by engine displacement (cc), inclusive bounds
DEFAULT_SOAT_RATES: List[Dict[str, Any]] = [
    {"id": "CC_0_100", "min_displacement": 0, "max_displacement": 99, "price": 243_700},
    {"id": "CC_100_200", "min_displacement": 100, "max_displacement": 200, "price": 326_800},
    {"id": "CC_200_PLUS", "min_displacement": 201, "max_displacement": 99_999, "price": 758_600},
]
