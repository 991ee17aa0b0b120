#!/usr/bin/env python3
"""
Station simulator: posts sinusoidal outdoor temperature telemetry to the webhook.
Useful as a traffic generator against a local API.
"""

import argparse
import logging
import math
import os
import sys
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TARGET = "http://localhost:8080"
REQUEST_TIMEOUT = 10  # seconds


@dataclass(frozen=True)
class WaveConfig:
    amplitude_c: float = 5.0
    period_seconds: float = 600.0
    baseline_c: float = 20.0
    phase_deg: float = 0.0

    def temperature_c(self, elapsed_seconds: float) -> float:
        phase_rad = math.radians(self.phase_deg)
        angle = 2 * math.pi * elapsed_seconds / self.period_seconds + phase_rad
        return self.baseline_c + self.amplitude_c * math.sin(angle)


def build_sample_payload(elapsed_seconds: float, now: datetime, wave: WaveConfig) -> Dict[str, str]:
    """Form fields for one sample; only ``dateutc`` and ``tempf`` are sent."""
    temp_f = wave.temperature_c(elapsed_seconds) * 9.0 / 5.0 + 32.0
    return {
        "dateutc": now.strftime("%Y-%m-%d %H:%M:%S"),
        "tempf": f"{temp_f:.1f}",
    }


def webhook_url(target: str) -> str:
    return target.rstrip("/") + "/api/webhook"


def run(
    target: str,
    interval: float = 10,
    count: int = 0,
    wave: WaveConfig = WaveConfig(),
    session: Optional[requests.Session] = None,
    clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Post ``count`` samples (forever when 0). Returns the number of posts made."""
    url = webhook_url(target)
    session = session or requests.Session()
    started = clock()
    sent = 0

    logger.info(f"POST target {url}, interval {interval}s, count {count}. Press Ctrl+C to stop.")
    logger.info(
        f"Wave config: amplitude={wave.amplitude_c}C, period={wave.period_seconds}s, "
        f"baseline={wave.baseline_c}C, phase={wave.phase_deg}deg"
    )

    while count <= 0 or sent < count:
        now = clock()
        form = build_sample_payload((now - started).total_seconds(), now, wave)
        response = session.post(url, data=form, timeout=REQUEST_TIMEOUT)
        sent += 1
        logger.info(f"POST {url} (iteration {sent}) -> {response.status_code} {response.reason}: {response.text}")

        if count <= 0 or sent < count:
            sleep(interval)

    return sent


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Weather station webhook simulator')
    parser.add_argument('--target', default=os.getenv("SIM_TARGET_URL", DEFAULT_TARGET),
                        help='Base URL of the API (env SIM_TARGET_URL)')
    parser.add_argument('--interval', type=float, default=10, help='Seconds between posts')
    parser.add_argument('--count', type=int, default=0, help='Number of posts, 0 runs until interrupted')
    parser.add_argument('--amplitude', type=float, default=5.0, help='Wave amplitude in Celsius')
    parser.add_argument('--period', type=float, default=600.0, help='Wave period in seconds')
    parser.add_argument('--baseline', type=float, default=20.0, help='Wave baseline in Celsius')
    parser.add_argument('--phase', type=float, default=0.0, help='Wave phase shift in degrees')

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    wave = WaveConfig(
        amplitude_c=args.amplitude,
        period_seconds=args.period,
        baseline_c=args.baseline,
        phase_deg=args.phase,
    )

    try:
        run(args.target, interval=args.interval, count=args.count, wave=wave)
        logger.info("Simulation finished.")
        return 0
    except KeyboardInterrupt:
        logger.info("Simulation canceled.")
        return 0
    except Exception as e:
        logger.error(f"Simulator error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
