"""Front-end pipeline glue for parsing and rendering module statements."""

from .pipeline import FrontEndResult, run_frontend

__all__ = ["FrontEndResult", "run_frontend"]
