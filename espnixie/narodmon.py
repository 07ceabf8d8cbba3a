"""Client for the narodmon.ru "sensorsNearby" API with value resolution."""

from __future__ import annotations

import hashlib
import http.client
import json
import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Union

from .logs import LoggingLevel

NARODMON_HOST = "narodmon.ru"
NARODMON_PORT = 80
NARODMON_API_PATH = "/api"

NARODMON_TYPE_TEMPERATURE = 1
NARODMON_TYPE_HUMIDITY = 2
NARODMON_TYPE_PRESSURE = 3

MIN_REQUEST_PERIOD = 1 * 60 * 1000
RESPONSE_TIMEOUT = 2 * 1000
T_MAX_TIME = 30 * 60 * 1000
H_MAX_TIME = 10 * 60 * 1000
P_MAX_TIME = 1 * 60 * 60 * 1000

REQUEST_DEVICES_LIMIT = 20
SENSOR_COUNT_LIMIT = REQUEST_DEVICES_LIMIT * 3

_MESSAGE_LIMIT = 511
_FLOAT_PREFIX = re.compile(r"\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_INT_PREFIX = re.compile(r"\s*[-+]?\d+")


def _millis() -> int:
    return int(time.monotonic() * 1000)


class ResolveMode(Enum):
    CLOSEST = 0
    MIN = 1
    MAX = 2
    AVG = 3


@dataclass
class SensorValue:
    type: int = -1
    value: Optional[int] = None
    distance: int = 0


class BufferLogger:
    """Collects log lines into in-memory buffers; errors go to a separate buffer."""

    def __init__(self, enabled: bool = False, clock: Optional[Callable[[], int]] = None):
        self.enabled = enabled
        self._clock = clock or _millis
        self.response = ""
        self.error = ""

    def log(self, level, fmt: str, *args) -> None:
        if not self.enabled:
            return
        message = (fmt % args if args else fmt)[:_MESSAGE_LIMIT]
        line = f"{self._clock()}: {message}\r\n"
        if level == LoggingLevel.ERROR:
            self.error += line
        else:
            self.response += line

    def reset(self) -> None:
        self.response = ""


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def resolve_value(
    values: Iterable[SensorValue], sensor_type: int, mode: ResolveMode
) -> Optional[int]:
    """Pick one value of the given sensor type, trimming extremes where possible."""
    sensors = [s for s in values if s.type == sensor_type]
    if not sensors:
        return None
    if mode is ResolveMode.CLOSEST:
        return min(sensors, key=lambda s: s.distance).value
    ordered = sorted(s.value for s in sensors)
    count = len(ordered)
    if mode is ResolveMode.MIN:
        return ordered[1 if count > 1 else 0]
    if mode is ResolveMode.MAX:
        return ordered[count - 2 if count > 1 else 0]
    trimmed = ordered[1:-1] if count > 2 else ordered
    return _trunc_div(sum(trimmed), len(trimmed))


def _to_float(raw) -> float:
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        return float(raw)
    match = _FLOAT_PREFIX.match(str(raw))
    return float(match.group()) if match else 0.0


def _to_int(raw) -> int:
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        return int(raw)
    match = _INT_PREFIX.match(str(raw))
    return int(match.group()) if match else 0


class Narodmon:
    """Requests nearby public sensors and keeps the latest T, H and P readings."""

    host = NARODMON_HOST
    port = NARODMON_PORT

    def __init__(self, device_id: str, clock: Optional[Callable[[], int]] = None):
        self._clock = clock or _millis
        self.log = BufferLogger(clock=self._clock)
        self.uuid = hashlib.md5(device_id.encode("utf-8")).hexdigest()
        self.api_key = ""
        self.use_lat_lng = False
        self.lat = 0.0
        self.lng = 0.0
        self.radius = 0
        self.req_t = True
        self.req_h = True
        self.req_p = True
        self._t = 0
        self._t_time = 0
        self._h = 0
        self._h_time = 0
        self._p = 0
        self._p_time = 0
        self._request_time = 0
        self._distance = 0
        self._key = ""
        self._values: list[SensorValue] = []
        self._current = SensorValue()

    def _debug(self, fmt: str, *args) -> None:
        self.log.log(LoggingLevel.DEBUG, fmt, *args)

    def _error(self, fmt: str, *args) -> None:
        self.log.log(LoggingLevel.ERROR, fmt, *args)

    def set_api_key(self, api_key: str) -> None:
        self._debug("setApiKey: %s", api_key)
        self.api_key = api_key

    def set_config_use_lat_lng(self, use) -> None:
        self._debug("setConfigUseLatLng: %u", int(bool(use)))
        self.use_lat_lng = bool(use)

    def set_config_lat_lng(self, lat: float, lng: float) -> None:
        self._debug("setConfigLatLng: %f; %f", lat, lng)
        self.lat = lat
        self.lng = lng
        self.set_config_use_lat_lng(True)

    def set_config_radius(self, radius: int) -> None:
        self._debug("setConfigRadius: %u", radius)
        self.radius = radius

    def set_config_req_t(self, req) -> None:
        self._debug("setConfigReqT: %u", int(bool(req)))
        self.req_t = bool(req)

    def set_config_req_h(self, req) -> None:
        self._debug("setConfigReqH: %u", int(bool(req)))
        self.req_h = bool(req)

    def set_config_req_p(self, req) -> None:
        self._debug("setConfigReqP: %u", int(bool(req)))
        self.req_p = bool(req)

    def build_request(self) -> str:
        """JSON body of the sensorsNearby request."""
        request: dict = {"cmd": "sensorsNearby"}
        if self.use_lat_lng:
            request["lat"] = self.lat
            request["lng"] = self.lng
        if self.radius > 0:
            request["radius"] = self.radius
        flags = (
            (self.req_t, NARODMON_TYPE_TEMPERATURE),
            (self.req_h, NARODMON_TYPE_HUMIDITY),
            (self.req_p, NARODMON_TYPE_PRESSURE),
        )
        request["types"] = [kind for wanted, kind in flags if wanted]
        request["limit"] = REQUEST_DEVICES_LIMIT
        request["pub"] = 1
        request["uuid"] = self.uuid
        request["api_key"] = self.api_key
        return json.dumps(request, separators=(",", ":"))

    def http_request(self, body: str) -> bytes:
        """Raw HTTP POST carrying the given JSON body."""
        payload = body.encode("utf-8")
        head = (
            f"POST {NARODMON_API_PATH} HTTP/1.1\r\n"
            f"Host: {self.host}\r\n"
            "Content-Type: application/json\r\n"
            "Cache-Control: no-cache\r\n"
            "User-Agent: esp-nixie\r\n"
            f"Content-Length: {len(payload)}\r\n"
            "\r\n"
        )
        return head.encode("ascii") + payload

    def request(self) -> bool:
        """Query the service; returns True when a response was received and parsed."""
        self.log.reset()
        self._debug("New request")
        now = self._clock()
        delta = now - self._request_time
        if self._request_time and delta < MIN_REQUEST_PERIOD:
            self._debug(
                "Too short interval between requests. %u less then %u",
                delta,
                MIN_REQUEST_PERIOD,
            )
            return False

        body = self.build_request()
        conn = http.client.HTTPConnection(self.host, self.port, timeout=RESPONSE_TIMEOUT / 1000)
        try:
            conn.connect()
        except OSError:
            self._debug("Connect fail")
            conn.close()
            return False

        try:
            self._debug("Connected")
            self._debug("Request[%u]: %s", len(body), body)
            self._request_time = now
            conn.sock.sendall(self.http_request(body))
            response = http.client.HTTPResponse(conn.sock, method="POST")
            response.begin()
            data = response.read()
            self._debug("Got data: %i bytes", len(data))
            self.handle_response(data)
        except (OSError, http.client.HTTPException, ValueError) as exc:
            self._error("Error %s", exc)
            return False
        finally:
            conn.close()
            self._debug("Disconnected")
        return True

    def handle_response(self, data: Union[bytes, str]) -> list[SensorValue]:
        """Parse a response document and update the stored readings."""
        document = json.loads(data)
        self._values = []
        self._key = ""
        self._current = SensorValue(distance=self._distance)
        self._walk(document)
        self._end_document()
        return list(self._values)

    def _walk(self, node) -> None:
        if isinstance(node, dict):
            self._start_object()
            for key, child in node.items():
                self._key = key
                self._walk(child)
            self._end_object()
        elif isinstance(node, list):
            for child in node:
                self._walk(child)
        else:
            self._value(node)

    def _start_object(self) -> None:
        self._current = SensorValue(distance=self._distance)

    def _value(self, raw) -> None:
        self._debug("%s: %s", self._key, raw)
        if self._key == "value":
            self._current.value = int(_to_float(raw) * 10)
        elif self._key == "type":
            self._current.type = _to_int(raw)
        elif self._key == "distance":
            self._distance = int(_to_float(raw) * 100)
        self._key = ""

    def _end_object(self) -> None:
        current = self._current
        if current.type >= 0 and current.value is not None:
            self._debug("%u------------", len(self._values))
            if len(self._values) < SENSOR_COUNT_LIMIT:
                self._values.append(current)
                self._start_object()

    def _end_document(self) -> None:
        self._debug("End document")
        value = resolve_value(self._values, NARODMON_TYPE_TEMPERATURE, ResolveMode.MIN)
        if value is not None:
            self._t = value
            self._t_time = self._clock()
            self._debug("T=%f", self.get_t())
        value = resolve_value(self._values, NARODMON_TYPE_HUMIDITY, ResolveMode.CLOSEST)
        if value is not None:
            self._h = value
            self._h_time = self._clock()
            self._debug("H=%f", self.get_h())
        value = resolve_value(self._values, NARODMON_TYPE_PRESSURE, ResolveMode.CLOSEST)
        if value is not None:
            self._p = value
            self._p_time = self._clock()
            self._debug("P=%f", self.get_p())

    def _fresh(self, stamp: int, max_age: int) -> bool:
        return stamp > 0 and (self._clock() - stamp) < max_age

    def has_t(self) -> bool:
        return self._fresh(self._t_time, T_MAX_TIME)

    def get_t(self) -> float:
        return self._t / 10.0

    def has_h(self) -> bool:
        return self._fresh(self._h_time, H_MAX_TIME)

    def get_h(self) -> float:
        return self._h / 10.0

    def has_p(self) -> bool:
        return self._fresh(self._p_time, P_MAX_TIME)

    def get_p(self) -> float:
        return self._p / 10.0