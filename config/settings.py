from pathlib import Path

from decouple import config

# -------------------------------
# Diretórios base
# -------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent

# -------------------------------
# API de registros clínicos
# -------------------------------
CLINIC_API_BASE    = config("CLINIC_API_BASE", default="http://localhost:3001/api")
CLINIC_API_TOKEN   = config("CLINIC_API_TOKEN", default="")
CLINIC_API_TIMEOUT = config("CLINIC_API_TIMEOUT", default=10.0, cast=float)
CLINIC_API_RETRIES = config("CLINIC_API_RETRIES", default=3, cast=int)  # somente GET

# -------------------------------
# Snapshot
# -------------------------------
SNAPSHOT_FETCH_WORKERS = config("SNAPSHOT_FETCH_WORKERS", default=6, cast=int)
TREATMENTS_FETCH_LIMIT = config("TREATMENTS_FETCH_LIMIT", default=100, cast=int)
PATIENTS_FETCH_LIMIT   = config("PATIENTS_FETCH_LIMIT", default=100, cast=int)
DOSES_FETCH_LIMIT      = config("DOSES_FETCH_LIMIT", default=500, cast=int)

# -------------------------------
# Logging
# -------------------------------
LOG_LEVEL = config("LOG_LEVEL", default="INFO").upper()
JSON_LOGS = config("JSON_LOGS", default=False, cast=bool)
