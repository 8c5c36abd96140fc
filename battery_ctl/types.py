from enum import Enum


class Verb(str, Enum):
    STATUS = "status"
    CHARGE = "charge"
    DISCHARGE = "discharge"
    LIMIT = "limit"


class ChargeAction(str, Enum):
    START = "start"
    STOP = "stop"
    FULL = "full"


class DischargeAction(str, Enum):
    START = "start"
    STOP = "stop"


class LimitAction(str, Enum):
    ON = "on"
    OFF = "off"


class ThresholdMode(str, Enum):
    START = "start"
    STOP = "stop"


class PolicyField(str, Enum):
    START_THRESHOLD = "start_threshold"
    STOP_THRESHOLD = "stop_threshold"
    INHIBIT = "inhibit"
    FORCE_DISCHARGE = "force_discharge"


class BackendName(str, Enum):
    TPACPI = "tpacpi"
    SYSFS = "sysfs"
    AUTO = "auto"


# sub-verb enum of every verb, None for verbs without one
SUB_VERBS = {
    Verb.STATUS: None,
    Verb.CHARGE: ChargeAction,
    Verb.DISCHARGE: DischargeAction,
    Verb.LIMIT: LimitAction,
}
