"""Flask server exposing network interface throughput as Prometheus metrics."""

import argparse
import logging
import atexit
import time
from functools import wraps

from flask import Flask, Response, jsonify, request
from apscheduler.schedulers.background import BackgroundScheduler
from prometheus_client import CONTENT_TYPE_LATEST

from config import Config
from metrics import NetworkGauges
from sampler import NetworkSampler
from store import SampleStore

# Configure logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = Flask(__name__)

store = SampleStore(clock=time.monotonic)
gauges = NetworkGauges()
sampler = NetworkSampler(
    store,
    gauges,
    stale_after=Config.STALE_AFTER_SECONDS,
    max_interfaces=Config.MAX_INTERFACES,
    clock=time.monotonic
)


def sample_network():
    """Run one sampling cycle, logging instead of raising on failure."""
    try:
        sampler.sample_once()
    except Exception as e:
        logger.error(f"Error sampling network counters: {e}")


def client_ip(remote_addr: str) -> str:
    """Strip an optional port suffix from a client address."""
    if remote_addr.startswith('['):
        return remote_addr[1:].split(']', 1)[0]
    if remote_addr.count(':') == 1:
        return remote_addr.rsplit(':', 1)[0]
    return remote_addr


def is_ip_allowed(remote_addr: str, allowed_ips: list) -> bool:
    """Exact match of the client address against the allowlist; empty allows all."""
    if not allowed_ips:
        return True
    return client_ip(remote_addr or '') in allowed_ips


def require_allowed_ip(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not is_ip_allowed(request.remote_addr, Config.get_allowed_ips()):
            logger.warning(f"Denied request from {request.remote_addr} to {request.path}")
            return Response('Access denied\n', status=403, mimetype='text/plain')
        return view(*args, **kwargs)
    return wrapper


# API Routes
@app.route('/metrics')
@require_allowed_ip
def metrics():
    """Expose the interface gauges in Prometheus text format."""
    return Response(gauges.render(), content_type=CONTENT_TYPE_LATEST)


@app.route('/api/interfaces')
@require_allowed_ip
def get_interfaces():
    """Get the last sample of every tracked interface."""
    now = time.monotonic()
    return jsonify([
        {
            'name': s.name,
            'rx_bytes': s.rx_bytes,
            'tx_bytes': s.tx_bytes,
            'rx_packets': s.rx_packets,
            'tx_packets': s.tx_packets,
            'rx_errors': s.rx_errors,
            'tx_errors': s.tx_errors,
            'rx_drops': s.rx_drops,
            'tx_drops': s.tx_drops,
            'seconds_since_seen': round(now - s.last_seen, 3)
        }
        for s in store.snapshot()
    ])


@app.route('/api/config')
@require_allowed_ip
def get_config():
    """Get current sampling configuration."""
    return jsonify({
        'sampling': Config.get_sampling(),
        'allowlist_enabled': bool(Config.get_allowed_ips())
    })


@app.route('/health')
def health_check():
    """Health check endpoint."""
    return jsonify({'status': 'healthy', 'tracked_interfaces': len(store)})


def start_scheduler():
    """Start the background scheduler that drives the sampler."""
    scheduler = BackgroundScheduler()

    # A stalled read times out in read_net_dev, so a run ends within READ_TIMEOUT
    # and overlapping ticks are coalesced rather than queued
    scheduler.add_job(
        sample_network,
        'interval',
        seconds=Config.SAMPLE_INTERVAL,
        id='sample_network',
        max_instances=1,
        coalesce=True,
        replace_existing=True
    )

    scheduler.start()
    atexit.register(lambda: scheduler.shutdown())

    return scheduler


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Network interface speed exporter')
    parser.add_argument('--host', default=Config.HOST, help='Address to listen on')
    parser.add_argument('--port', type=int, default=Config.PORT, help='Port to listen on')
    parser.add_argument(
        '--allowed-ips',
        default=Config.ALLOWED_IPS,
        help='Comma-separated list of allowed IP addresses'
    )
    return parser.parse_args(argv)


# Initialize on module load (runs with gunicorn)
if Config.START_SAMPLER:
    sample_network()
    scheduler = start_scheduler()
    logger.info("Network sampler started")


if __name__ == '__main__':
    args = parse_args()
    Config.ALLOWED_IPS = args.allowed_ips

    logger.info(f"Starting server on {args.host}:{args.port} with IP allowlist: {args.allowed_ips}")
    app.run(
        host=args.host,
        port=args.port,
        debug=Config.DEBUG,
        use_reloader=False
    )
