"""english_optimizer - rewrite English text with a local or cloud LLM."""

__version__ = "1.0.0"

from english_optimizer.config import Config, load_config
from english_optimizer.optimizer import OptimizationResult, Optimizer
from english_optimizer.prompts.templates import OptimizationMode
from english_optimizer.session import ClassicSession, InstantSession, SessionState

__all__ = [
    "ClassicSession",
    "Config",
    "InstantSession",
    "OptimizationMode",
    "OptimizationResult",
    "Optimizer",
    "SessionState",
    "load_config",
]
