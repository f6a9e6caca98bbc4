# tasks.py  ── invoke ≥2.2
from invoke import task, Context  # type: ignore
from typing import Optional

import pathlib
import shutil


BASE_ENV = pathlib.Path(__file__).parent
OUTPUT_DIR = BASE_ENV / "output"


@task(
    help={
        "output_dir": "Where figures and coefficient tables are written (default: ./output)",
    }
)
def analyze(c: Context, output_dir: Optional[str] = None) -> None:
    """Run the full rebound / high-danger fixed-effects analysis once."""
    out = pathlib.Path(output_dir) if output_dir else OUTPUT_DIR
    with c.cd(str(BASE_ENV)):
        c.run(
            "python -c \"from src.nhl_rebound_analysis.pipeline import run_analysis; "
            f"run_analysis(output_dir=r'{out}')\"",
            pty=False,
        )
    print(f"\n📊 Outputs written to {out}")


@task(
    help={
        "k": "Only run tests matching this expression",
        "verbose": "Verbose pytest output",
    }
)
def test(c: Context, k: Optional[str] = None, verbose: bool = False) -> None:
    """Run the test-suite."""
    cmd = "python -m pytest tests"
    if k:
        cmd += f" -k '{k}'"
    if verbose:
        cmd += " -v"
    with c.cd(str(BASE_ENV)):
        c.run(cmd, pty=False)


@task
def clean(c: Context) -> None:
    """Remove generated outputs and caches."""
    for path in [OUTPUT_DIR, BASE_ENV / ".pytest_cache"]:
        if path.exists():
            shutil.rmtree(path)
            print(f"🗑️  Removed {path}")
    for cache in BASE_ENV.rglob("__pycache__"):
        shutil.rmtree(cache, ignore_errors=True)
