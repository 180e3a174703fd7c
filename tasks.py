# type: ignore
from invoke import task


@task
def venv(ctx):
    """Create the development environment with uv."""
    ctx.run("uv sync --extra dev")


@task
def lint(ctx):
    """
    Static checks: ruff lint and format check, then mypy.
    """
    ctx.run("ruff check src tests", pty=True)
    ctx.run("ruff format --check src tests", pty=True)
    ctx.run("mypy src", pty=True)


@task
def test(ctx):
    """
    Run tests with coverage information.
    """
    ctx.run("pytest --cov=src/raspimcu --cov-report=term-missing", pty=True)


@task
def devices(ctx, json=False):
    """List boards attached to this machine using the working tree."""
    ctx.run(f"uv run raspimcu devices{' --json' if json else ''}", pty=True)


@task
def build_package(ctx):
    """
    Build sdist and wheel with uv.
    """
    ctx.run("rm -rf dist")
    ctx.run("uv build")
