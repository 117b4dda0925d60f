from bngexport.logging import get_logger
import logging

# pytest captures log records itself - console_output=False avoids duplication
get_logger(level=logging.DEBUG, console_output=False)
