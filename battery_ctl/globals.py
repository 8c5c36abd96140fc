APP_NAME = "battery-ctl"
APP_VERSION = "1.0.0"

DEFAULT_BATTERY = 1
DEFAULT_START_THRESHOLD = 40
DEFAULT_STOP_THRESHOLD = 80
FULL_CHARGE_THRESHOLD = 99 # start=stop=99 disables limiting
MIN_THRESHOLD, MAX_THRESHOLD = 0, 100

DEFAULT_BACKEND = "tpacpi"
BACKEND_TIMEOUT = 10 # seconds per backend call

POWER_SUPPLY_DIR = "/sys/class/power_supply/"
SYSTEM_CONFIG_FILE = "/etc/battery-ctl.conf"
TPACPI_BAT = "tpacpi-bat"
ACPI = "acpi"
