"""
Tool catalog for the Namecheap MCP server.

This module contains:
- Core type: ToolDefinition
- NAMECHEAP_TOOLS, the fixed catalog of registrar tools

Each tool declares a JSON Schema for its arguments. The schema is both what
MCP clients see in tools/list and what incoming arguments are validated
against before any registrar call is made.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from jsonschema import Draft202012Validator

from .config import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, SUPPORTED_RECORD_TYPES
from .models import Tool, ToolInputSchema


@dataclass
class ToolDefinition:
    """
    Definition of a registrar operation exposed as an MCP tool.

    - name: tool name as seen by MCP clients
    - description: human-readable description for LLM agents
    - properties: JSON Schema for each accepted argument
    - required: arguments that must be present
    """

    name: str
    description: str
    properties: dict[str, dict[str, Any]] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)

    @property
    def schema(self) -> dict[str, Any]:
        """Full JSON Schema used for argument validation."""
        return {
            "type": "object",
            "properties": self.properties,
            "required": self.required,
            "additionalProperties": False,
        }

    def validate_arguments(self, arguments: dict[str, Any]) -> list[str]:
        """
        Validate arguments against this tool's schema.

        Returns list of validation errors. Empty list = valid.
        Unknown arguments are rejected; tools receive only what they declare.
        """
        validator = Draft202012Validator(self.schema)
        errors = sorted(validator.iter_errors(arguments), key=lambda e: str(list(e.path)))
        messages = []
        for error in errors:
            location = "/".join(str(part) for part in error.path)
            messages.append(f"{location}: {error.message}" if location else error.message)
        return messages

    def to_mcp_tool(self) -> Tool:
        """Convert this definition to an MCP Tool."""
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=ToolInputSchema(
                properties=self.properties,
                required=self.required,
            ),
        )


# -----------------------------------------------------------------------------
# Shared Argument Schemas
# -----------------------------------------------------------------------------

DOMAIN_PROPERTY: dict[str, Any] = {
    "type": "string",
    "minLength": 1,
    "description": 'Domain name (e.g., "example.com")',
}

HOST_RECORD_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {
            "type": "string",
            "description": 'Host name (e.g., "@" for root, "www" for subdomain)',
        },
        "type": {
            "type": "string",
            "description": "Record type (A, AAAA, CNAME, MX, TXT, NS, etc.)",
            "enum": list(SUPPORTED_RECORD_TYPES),
        },
        "address": {
            "type": "string",
            "description": "Record value (IP address, hostname, or text)",
        },
        "mxPref": {
            "type": ["string", "integer"],
            "description": "MX priority (required for MX records)",
        },
        "ttl": {
            "type": ["string", "integer"],
            "description": "Time to live in seconds (default: 1800)",
        },
    },
    "required": ["name", "type", "address"],
    "additionalProperties": False,
    "if": {"properties": {"type": {"const": "MX"}}, "required": ["type"]},
    "then": {"required": ["mxPref"]},
}


# -----------------------------------------------------------------------------
# Namecheap Tools
# -----------------------------------------------------------------------------

NAMECHEAP_TOOLS: list[ToolDefinition] = [
    ToolDefinition(
        name="namecheap_check_domain",
        description=(
            "Check if one or more domain names are available for registration. "
            "Returns availability status and premium pricing if applicable."
        ),
        properties={
            "domains": {
                "type": "array",
                "items": {"type": "string", "minLength": 1},
                "minItems": 1,
                "description": 'Array of domain names to check (e.g., ["example.com", "example.net"])',
            },
        },
        required=["domains"],
    ),
    ToolDefinition(
        name="namecheap_list_domains",
        description=(
            "List all domains in your Namecheap account. "
            "Supports pagination for large domain portfolios."
        ),
        properties={
            "page": {
                "type": "integer",
                "minimum": 1,
                "default": DEFAULT_PAGE,
                "description": "Page number for pagination (default: 1)",
            },
            "pageSize": {
                "type": "integer",
                "minimum": 1,
                "maximum": MAX_PAGE_SIZE,
                "default": DEFAULT_PAGE_SIZE,
                "description": "Number of domains per page (default: 100, max: 100)",
            },
        },
    ),
    ToolDefinition(
        name="namecheap_get_domain_info",
        description=(
            "Get detailed information about a specific domain including owner details, "
            "DNS settings, expiration date, and modification rights."
        ),
        properties={"domain": DOMAIN_PROPERTY},
        required=["domain"],
    ),
    ToolDefinition(
        name="namecheap_get_dns_hosts",
        description=(
            "Get all DNS host records for a domain including A, AAAA, CNAME, MX, TXT, "
            "and other record types."
        ),
        properties={"domain": DOMAIN_PROPERTY},
        required=["domain"],
    ),
    ToolDefinition(
        name="namecheap_set_dns_hosts",
        description=(
            "Set DNS host records for a domain. Replaces all existing records with the "
            "provided configuration. Use carefully as this overwrites existing DNS settings."
        ),
        properties={
            "domain": DOMAIN_PROPERTY,
            "hosts": {
                "type": "array",
                "items": HOST_RECORD_SCHEMA,
                "description": "Array of DNS host records to set",
            },
        },
        required=["domain", "hosts"],
    ),
    ToolDefinition(
        name="namecheap_get_nameservers",
        description=(
            "Get the current nameservers configured for a domain. "
            "Shows whether using Namecheap DNS or custom nameservers."
        ),
        properties={"domain": DOMAIN_PROPERTY},
        required=["domain"],
    ),
    ToolDefinition(
        name="namecheap_set_nameservers",
        description=(
            "Set custom nameservers for a domain. Use this to point your domain to "
            "external DNS providers like Cloudflare, AWS Route53, etc."
        ),
        properties={
            "domain": DOMAIN_PROPERTY,
            "nameservers": {
                "type": "array",
                "items": {"type": "string", "minLength": 1},
                "description": (
                    'Array of nameserver hostnames (e.g., ["ns1.cloudflare.com", '
                    '"ns2.cloudflare.com"])'
                ),
            },
        },
        required=["domain", "nameservers"],
    ),
]
