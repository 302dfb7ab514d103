"""Generation pipeline stages."""

from .assembler import ModuleAssembler
from .compositor import ChainCompositor, compose_chain
from .imports import ImportAggregator, combine_imports
from .planner import ChainPlanner
from .synthesizer import Comment, FunctionSynthesizer, synthesize_function

__all__ = [
    "ChainCompositor",
    "ChainPlanner",
    "Comment",
    "FunctionSynthesizer",
    "ImportAggregator",
    "ModuleAssembler",
    "combine_imports",
    "compose_chain",
    "synthesize_function",
]
