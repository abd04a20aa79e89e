import os

from dotenv import load_dotenv

load_dotenv()

# Paths
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(BASE_DIR, "data")

INDICES_FILE = os.path.join(DATA_DIR, "indices.json")

# Stockbit Settings
STOCKBIT_BASE_URL = os.getenv("STOCKBIT_BASE_URL", "https://exodus.stockbit.com")
STOCKBIT_TOKEN = os.getenv("STOCKBIT_TOKEN", "")
STOCKBIT_TIMEOUT = float(os.getenv("STOCKBIT_TIMEOUT", "30"))
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"

# Ranking Settings
RANKING_BATCH_SIZE = int(os.getenv("RANKING_BATCH_SIZE", "5"))
DEFAULT_RANKING_MODE = "watchlist"
