"""Conversions from conversation Messages to provider wire formats."""

from nebius_llm.transform.openai_format import convert_to_openai_messages
from nebius_llm.transform.r1_format import convert_to_r1_format

__all__ = ["convert_to_openai_messages", "convert_to_r1_format"]
