import logging
import os
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Oregon DEQ copy of the WBD (NHDH_OR_931v220), layer 3 = HUC12
HUC12_SERVICE_URL = "https://arcgis.deq.state.or.us/arcgis/rest/services/WQ/WBD/MapServer/3"
HUC12_QUERY_URL = f"{HUC12_SERVICE_URL}/query?"

# approximate Oregon extent in decimal degrees
OREGON_X_BOUNDS = (-124.6155, -116.3519)
OREGON_Y_BOUNDS = (41.8075, 46.3586)

HUC12_COLUMNS = ['HUC12', 'HUC12_Name']
NA_WARNING = "Error, NA returned"


def load_vars(env_path=None):
    """
    Load environment variables from a .env file. Called once by the CLI.

    A missing .env file is fine, the service needs no credentials.
    """
    if env_path is None:
        env_path = os.path.join(os.getcwd(), '.env')
    if os.path.exists(env_path):
        load_dotenv(env_path)
        logger.info(f"Loaded environment variables from {env_path}")
        return True
    return False


def get_query_url():
    """Query URL for the HUC12 layer, HUC12_QUERY_URL overrides the default."""
    return os.getenv("HUC12_QUERY_URL", HUC12_QUERY_URL)
