#!/usr/bin/env python3
"""
Capability Map CLI - Dual Mode

This script can operate in two modes:
1. Direct mode (default): Reads the workbook locally using services
2. API mode: Makes HTTP requests to a running FastAPI backend

Usage:
    # Direct mode (reads the workbook)
    python scripts/capability_map_cli.py summary --file capability_map.xlsx
    python scripts/capability_map_cli.py lookup --function "Invoice Match" --min-score 3

    # API mode (uses FastAPI backend)
    python scripts/capability_map_cli.py --api-url http://localhost:8080 domains
"""

import os
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging
from typing import Optional

import click
from dotenv import load_dotenv
import requests

from services import query_service
from services.capability_import_service import CapabilityImportService
from services.errors import CapabilityMapError, FunctionNotFound

# Load environment variables
load_dotenv()

# Configure logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'WARNING')
LOG_FILE = os.getenv('LOG_FILE')

log_handlers = [logging.StreamHandler(sys.stderr)]
if LOG_FILE:
    log_handlers.append(logging.FileHandler(LOG_FILE))

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=log_handlers
)

logger = logging.getLogger('capability_map_cli')

# Configuration
DEFAULT_EXCEL_FILE = os.getenv('EXCEL_FILE_PATH', 'data/capability_map.xlsx')
APPLICATIONS_SHEET = os.getenv('APPLICATIONS_SHEET', 'Applications')
MATRIX_SHEET = os.getenv('MATRIX_SHEET', 'Matrix')
REQUEST_TIMEOUT = 10


@click.group()
@click.option('--api-url', envvar='API_URL', help='FastAPI backend URL (enables API mode)')
@click.pass_context
def cli(ctx, api_url):
    """Capability Map CLI - Dual Mode Support"""
    ctx.ensure_object(dict)
    ctx.obj['api_url'] = api_url.rstrip('/') if api_url else None
    ctx.obj['mode'] = 'api' if api_url else 'direct'


file_option = click.option(
    '--file', '-f', 'file_path', default=DEFAULT_EXCEL_FILE, show_default=True,
    help='Workbook to read in direct mode'
)


@cli.command('summary')
@file_option
@click.pass_context
def summary_cmd(ctx, file_path: str):
    """Show how much data the capability map holds."""
    if ctx.obj['api_url']:
        summary_via_api(ctx.obj['api_url'])
    else:
        summary_direct(file_path)


@cli.command('domains')
@file_option
@click.pass_context
def domains_cmd(ctx, file_path: str):
    """Print the domain / vertical hierarchy."""
    if ctx.obj['api_url']:
        verticals = api_get(ctx.obj['api_url'], '/api/verticals')['verticals']
    else:
        snapshot, _ = load_snapshot(file_path)
        verticals = query_service.list_verticals(snapshot)['verticals']

    print_hierarchy(verticals)


@cli.command('lookup')
@click.option('--function', '-n', 'function', required=True, help='Function name')
@click.option('--score', type=int, help='Exact capability score')
@click.option('--min-score', type=int, help='Lowest score to keep')
@click.option('--max-score', type=int, help='Highest score to keep')
@file_option
@click.pass_context
def lookup_cmd(ctx, function: str, score: Optional[int], min_score: Optional[int],
               max_score: Optional[int], file_path: str):
    """List the applications scored against a function."""
    if ctx.obj['api_url']:
        params = {'function': function, 'score': score,
                  'minScore': min_score, 'maxScore': max_score}
        result = api_get(ctx.obj['api_url'], '/api/applications/by-capability',
                         {k: v for k, v in params.items() if v is not None})
    else:
        snapshot, _ = load_snapshot(file_path)
        try:
            result = query_service.applications_by_capability(
                snapshot, function, score=score, min_score=min_score, max_score=max_score
            )
        except FunctionNotFound as e:
            click.echo(f"✗ {e}", err=True)
            sys.exit(1)

    click.echo(f"\n{result['function']}: {result['count']} application(s)")
    for application in result['applications']:
        status = application.get('appLifecycleStatus', '-')
        click.echo(f"  [{application['capabilityScore']}] {application.get('appName')} ({status})")


# ============================================================================
# Direct Mode Implementation (Uses Services Directly)
# ============================================================================

def load_snapshot(file_path: str, progress: bool = False):
    """Read the workbook into (snapshot, stats), exiting on ingestion errors."""

    def on_progress(stage: str, percent: float, message: str):
        bar_length = 40
        filled = int(bar_length * percent / 100)
        bar = '█' * filled + '░' * (bar_length - filled)
        click.echo(f"\r[{bar}] {percent:.1f}% - {stage}: {message}", nl=False)

    service = CapabilityImportService(
        progress_callback=on_progress if progress else None,
        applications_sheet=APPLICATIONS_SHEET,
        matrix_sheet=MATRIX_SHEET
    )

    try:
        snapshot = service.build_snapshot(file_path)
    except CapabilityMapError as e:
        if progress:
            click.echo()
        logger.error(f"Load failed: {e}")
        click.echo(f"✗ Load failed: {e}", err=True)
        sys.exit(1)

    if progress:
        click.echo()  # New line after progress bar

    return snapshot, service.stats


def summary_direct(file_path: str):
    """Summarize the workbook by reading it locally."""
    click.echo(f"\n📁 Reading: {file_path}")

    _, stats = load_snapshot(file_path, progress=True)

    click.echo(f"\n✓ Workbook loaded")
    click.echo(f"\nStatistics:")
    click.echo(f"  Applications: {stats.get('applications', 0)}")
    click.echo(f"  Capabilities: {stats.get('capabilities', 0)}")
    click.echo(f"  Domains: {stats.get('domains', 0)}")
    click.echo(f"  Verticals: {stats.get('verticals', 0)}")
    click.echo(f"  Functions: {stats.get('functions', 0)}")
    click.echo(f"  Score entries: {stats.get('score_entries', 0)}")
    click.echo(f"  Unparseable scores: {stats.get('score_parse_failures', 0)}")
    click.echo(f"  Unknown application references: {stats.get('dangling_references', 0)}")


def print_hierarchy(verticals_by_domain):
    for domain, verticals in verticals_by_domain.items():
        click.echo(domain)
        for vertical in verticals:
            click.echo(f"  - {vertical}")


# ============================================================================
# API Mode Implementation (Uses FastAPI Backend)
# ============================================================================

def api_get(api_url: str, path: str, params: Optional[dict] = None) -> dict:
    """GET a JSON endpoint, exiting with the server's error message on failure."""
    try:
        response = requests.get(f"{api_url}{path}", params=params, timeout=REQUEST_TIMEOUT)
    except requests.exceptions.RequestException as e:
        click.echo(f"❌ Network error: {e}", err=True)
        sys.exit(1)

    if response.status_code != 200:
        try:
            message = response.json().get('error', response.text)
        except ValueError:
            message = response.text
        click.echo(f"❌ Request failed ({response.status_code}): {message}", err=True)
        sys.exit(1)

    return response.json()


def summary_via_api(api_url: str):
    """Summarize the data served by a running backend."""
    click.echo(f"\n🌐 Querying {api_url}...")

    health = api_get(api_url, '/health')
    if not health.get('excelLoaded'):
        click.echo(f"⚠️  Backend has no workbook loaded: {health.get('lastError') or 'unknown reason'}")

    applications = api_get(api_url, '/api/applications')
    capabilities = api_get(api_url, '/api/capabilities')
    domains = api_get(api_url, '/api/domains')

    click.echo(f"\nStatistics:")
    click.echo(f"  Generation: {health.get('generation', 0)}")
    click.echo(f"  Applications: {applications.get('count', 0)}")
    click.echo(f"  Capabilities: {capabilities.get('count', 0)}")
    click.echo(f"  Domains: {len(domains.get('domains', []))}")


if __name__ == '__main__':
    cli()
