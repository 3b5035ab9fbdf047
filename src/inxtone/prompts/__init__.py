"""Prompt templates that embed assembled context."""

from .assembler import PromptAssembler, PromptTemplate, TemplateNotFoundError

__all__ = ["PromptAssembler", "PromptTemplate", "TemplateNotFoundError"]
