"""HAR (HTTP Archive) file parsing and analysis.

This module decodes HAR files captured from browser developer tools and
reduces them to host, API and frequency statistics.

Example usage:
    from harscope.har import parse_har_file, analyze_document, generate_code_templates

    document = parse_har_file("capture.har")
    result = analyze_document(document, "capture.har")
    result.templates = generate_code_templates(result)
    print(f"{result.metadata.total_requests} requests to {result.metadata.unique_hosts} hosts")
"""

from harscope.har.analyzer import (
    AnalysisMetadata,
    AnalysisResult,
    ApiInfo,
    CodeTemplates,
    ExtractedData,
    HostInfo,
    analyze_document,
    is_important_header,
    simplify_content_type,
)
from harscope.har.generator import generate_code_templates
from harscope.har.params import extract_body_parameters
from harscope.har.parser import (
    HARDocument,
    HAREntry,
    HARRequest,
    HARResponse,
    parse_har_bytes,
    parse_har_file,
    parse_har_string,
)
from harscope.har.urls import extract_host, extract_path

__all__ = [
    # Parser
    "HARDocument",
    "HAREntry",
    "HARRequest",
    "HARResponse",
    "parse_har_bytes",
    "parse_har_file",
    "parse_har_string",
    # URLs and parameters
    "extract_host",
    "extract_path",
    "extract_body_parameters",
    # Analyzer
    "AnalysisMetadata",
    "AnalysisResult",
    "ApiInfo",
    "CodeTemplates",
    "ExtractedData",
    "HostInfo",
    "analyze_document",
    "is_important_header",
    "simplify_content_type",
    # Generator
    "generate_code_templates",
]
