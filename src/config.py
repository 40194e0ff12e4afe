from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

DATA_DIR = PROJECT_ROOT / "data"
RAW_DIR = DATA_DIR / "raw"
LIBRARY_DIR = PROJECT_ROOT / "libraries"

OUTPUTS_DIR = PROJECT_ROOT / "outputs"
TABLES_DIR = OUTPUTS_DIR / "tables"
RASTERS_DIR = OUTPUTS_DIR / "rasters"
LOGS_DIR = OUTPUTS_DIR / "logs"

LIBRARY_FILE = LIBRARY_DIR / "stsimLibrary.ssim"

SYNCROSIM_PACKAGE = "stsim"
PROJECT_NAME = "Definitions"
SCENARIO_NO_HARVEST = "No Harvest"
SCENARIO_HARVEST = "Harvest"

# Packages recorded in run metadata
STACK_PACKAGES = ["pysyncrosim", "pandas", "numpy", "matplotlib", "rasterio", "statsmodels", "pyarrow"]

# Project-scoped definitions
AMOUNT_UNITS = "hectares"
STATE_LABEL_X = "Forest Type"
STRATA = ["Entire Forest"]
FOREST_TYPES = ["Coniferous", "Deciduous", "Mixed"]
STATE_LABELS_Y = ["All"]
TRANSITION_TYPES = ["Fire", "Harvest", "Succession"]

AGE_FREQUENCY = 1
AGE_MAX = 101
AGE_GROUPS = [20, 40, 60, 80, 100]

# Scenario-scoped run control: 7 realizations over timesteps 0..10
MAXIMUM_ITERATION = 7
MINIMUM_TIMESTEP = 0
MAXIMUM_TIMESTEP = 10
IS_SPATIAL = True

# Deterministic transitions: (source, destination, minimum age, location)
DETERMINISTIC_TRANSITIONS = [
    ("Coniferous", "Coniferous", 21, "C1"),
    ("Deciduous", "Deciduous", None, "A1"),
    ("Mixed", "Mixed", 11, "B1"),
]

# Probabilistic transitions: (source, destination, transition type, probability, minimum age)
PROBABILISTIC_TRANSITIONS = [
    ("Coniferous", "Deciduous", "Fire", 0.01, None),
    ("Coniferous", "Deciduous", "Harvest", 1.0, 40),
    ("Deciduous", "Deciduous", "Fire", 0.002, None),
    ("Deciduous", "Mixed", "Succession", 0.1, 10),
    ("Mixed", "Deciduous", "Fire", 0.005, None),
    ("Mixed", "Coniferous", "Succession", 0.1, 20),
]

HARVEST_GROUP = "Harvest"
HARVEST_TARGET_BASELINE = 0
HARVEST_TARGET_HARVEST = 20  # hectares per year

OUTPUT_TIMESTEPS = 1

# Run and result settings
JOBS = 7
RASTER_TIMESTEP = 5

# Sample raster generation (stand-in for the workshop .tif files)
SAMPLE_RASTER_SHAPE = (50, 50)
SAMPLE_RASTER_SEED = 2024
SAMPLE_RASTER_CELL_SIZE = 100.0  # metres; 1 ha cells
SAMPLE_RASTER_CRS = "EPSG:32617"
