"""
Domain models — Pydantic types for the wizard.

    from ignite.core.models import Action, Receipt, EnvFile, Step, StepStatus
"""

from ignite.core.models.action import Action, Receipt
from ignite.core.models.env_file import EnvFile, EnvLine, LineKind, Section
from ignite.core.models.step import WIZARD_STEPS, Step, StepStatus, StepSummary

__all__ = [
    "WIZARD_STEPS",
    # action.py
    "Action",
    "Receipt",
    # env_file.py
    "EnvFile",
    "EnvLine",
    "LineKind",
    "Section",
    # step.py
    "Step",
    "StepStatus",
    "StepSummary",
]
