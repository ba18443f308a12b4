"""Domain initialization and configuration."""

from protean.domain import Domain

from canteen.config import get_settings
from canteen.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(log_dir=get_settings().log_dir, log_file_prefix="canteen")

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
canteen = Domain(name="canteen")
