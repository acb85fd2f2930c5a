# config.py
import os

# ======= Logging =======
LOG_LEVEL  = os.getenv("DLX_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = os.getenv(
    "DLX_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# ======= Command line defaults =======
# 0 means "find every solution". Library calls never read this value; it only
# seeds the --max-solutions default of the console command.
MAX_SOLUTIONS = int(os.getenv("DLX_MAX_SOLUTIONS", "0"))


class CFG:
    LOG_LEVEL  = LOG_LEVEL
    LOG_FORMAT = LOG_FORMAT

    MAX_SOLUTIONS = MAX_SOLUTIONS


__all__ = ["CFG"]
