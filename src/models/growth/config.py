from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[3]

REFERENCE_DIR = PROJECT_ROOT / "data" / "reference" / "jspe2000"
CONFIG_PATH = PROJECT_ROOT / "configs" / "config.yaml"


SEXES = ("male", "female")
METRICS = ("height", "weight")

# Age is expressed in years of 12 average-length months
DAYS_PER_MONTH = 30.44
MONTHS_PER_YEAR = 12

# Accepted age window for a measurement (years, inclusive)
AGE_MIN = 0.0
AGE_MAX = 18.0

DEFAULT_AGE_STEP = 0.1

# SD lines drawn on the chart, top to bottom
SD_LEVELS = {
    "height": (3.0, 2.0, 1.0, 0.0, -1.0, -2.0, -2.5, -3.0),
    "weight": (2.0, 1.0, 0.0, -1.0, -2.0),
}

# Height lines marking GH treatment eligibility (GH deficiency / achondroplasia)
TREATMENT_THRESHOLDS = {
    "height": (-2.5, -3.0),
    "weight": (),
}

# Result-table colouring bounds
NORMAL_SD_BOUND = 2.0
ALERT_SD_BOUND = {"height": 2.5, "weight": 2.0}
