import distro, psutil
import platform as pl
from importlib.metadata import PackageNotFoundError, version
from shutil import which

from battery_ctl.globals import ACPI, APP_NAME, APP_VERSION, POWER_SUPPLY_DIR, TPACPI_BAT
from battery_ctl.prints import print_block, print_info_block

def app_version() -> None: print(APP_NAME, 'version:', APP_VERSION)

def head() -> None:
    print_block(
        APP_NAME,
        'Laptop battery charging policy controller for Linux',
        f'{APP_NAME} version: '+APP_VERSION,
    )

def _pkg_version(pkg:str) -> str:
    try: return f'{pkg} package version: '+version(pkg)
    except PackageNotFoundError: return f'{pkg} package version: not installed'

def _tool(name:str) -> str: return f'{name}: '+(which(name) or 'not found')

def hardware_info() -> None:
    sensors = psutil.sensors_battery()
    print_info_block(
        'Hardware',
        'Linux distro: '+(distro.name(pretty=True) or 'Unknown'),
        'Linux kernel: '+pl.release(),
        'Architecture: '+pl.machine(),
        'Battery: '+(f'{sensors.percent:.0f}%, '+('plugged in' if sensors.power_plugged else 'on battery') if sensors else 'not detected'),
    )

def backend_info() -> None:
    print_info_block(
        'Backend',
        _tool(TPACPI_BAT),
        _tool(ACPI),
        'sysfs: '+POWER_SUPPLY_DIR,
    )

def python_info() -> None:
    print_info_block(
        'Python',
        'Python version: '+pl.python_version(),
        _pkg_version('click'),
        _pkg_version('distro'),
        _pkg_version('psutil'),
    )

def debug_info() -> None:
    head()
    hardware_info()
    backend_info()
    python_info()
