"""Value extraction and regex post-processing."""

from webgrab.core.extraction.extractor import extract_value, extract_values
from webgrab.core.extraction.postprocess import NO_MATCH, ProcessedValue, compile_pattern, post_process

__all__ = ['NO_MATCH', 'ProcessedValue', 'compile_pattern', 'extract_value', 'extract_values', 'post_process']
