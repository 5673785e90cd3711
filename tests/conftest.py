"""
Shared test fixtures for the Namecheap MCP server tests.

Provides a mock registrar transport, canned XML replies, clients and gateways.
"""

from __future__ import annotations

import httpx
import pytest

from namecheap_mcp.client import NamecheapClient
from namecheap_mcp.config import NamecheapConfig
from namecheap_mcp.gateway import NamecheapGateway


# -----------------------------------------------------------------------------
# Mock Registrar Transport
# -----------------------------------------------------------------------------


class MockRegistrar(httpx.AsyncBaseTransport):
    """
    Mock transport that answers registrar commands with canned XML.

    Replies are keyed by the ``Command`` query parameter. Every request is
    recorded so tests can assert on call counts and query parameters.
    """

    def __init__(
        self,
        replies: dict[str, str | tuple[int, str] | Exception] | None = None,
    ):
        self.replies = replies or {}
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        command = request.url.params.get("Command", "")
        reply = self.replies.get(command)
        if reply is None:
            return httpx.Response(200, text=api_error("1010101", f"Unknown command {command}"))
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, tuple):
            status, body = reply
            return httpx.Response(status, text=body)
        return httpx.Response(200, text=reply)

    @property
    def last_params(self) -> dict[str, str]:
        return dict(self.requests[-1].url.params)


# -----------------------------------------------------------------------------
# Canned Replies
# -----------------------------------------------------------------------------


def api_ok(command: str, body: str) -> str:
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<ApiResponse Status="OK" xmlns="http://api.namecheap.com/xml.response">\n'
        "  <Errors />\n"
        "  <Warnings />\n"
        f"  <RequestedCommand>{command}</RequestedCommand>\n"
        f'  <CommandResponse Type="{command}">\n'
        f"{body}\n"
        "  </CommandResponse>\n"
        "  <Server>PHX01APIEXT01</Server>\n"
        "  <ExecutionTime>0.05</ExecutionTime>\n"
        "</ApiResponse>"
    )


def api_error(number: str, message: str) -> str:
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<ApiResponse Status="ERROR" xmlns="http://api.namecheap.com/xml.response">\n'
        "  <Errors>\n"
        f'    <Error Number="{number}">{message}</Error>\n'
        "  </Errors>\n"
        "  <Warnings />\n"
        "  <CommandResponse />\n"
        "</ApiResponse>"
    )


CHECK_REPLY = api_ok(
    "namecheap.domains.check",
    '    <DomainCheckResult Domain="example.com" Available="true" ErrorNo="0" '
    'Description="" IsPremiumName="false" PremiumRegistrationPrice="0" />\n'
    '    <DomainCheckResult Domain="google.com" Available="false" ErrorNo="0" '
    'Description="" IsPremiumName="false" PremiumRegistrationPrice="0" />\n'
    '    <DomainCheckResult Domain="shop.io" Available="true" ErrorNo="0" '
    'Description="" IsPremiumName="true" PremiumRegistrationPrice="2500.0000" />',
)

LIST_REPLY = api_ok(
    "namecheap.domains.getList",
    "    <DomainGetListResult>\n"
    '      <Domain ID="127" Name="alpha.com" User="owner" Created="02/15/2016" '
    'Expires="02/15/2027" IsExpired="false" IsLocked="false" AutoRenew="false" />\n'
    '      <Domain ID="381" Name="beta.co.uk" User="owner" Created="04/28/2016" '
    'Expires="04/28/2027" IsExpired="false" IsLocked="false" AutoRenew="true" />\n'
    "    </DomainGetListResult>\n"
    "    <Paging><TotalItems>2</TotalItems><CurrentPage>1</CurrentPage>"
    "<PageSize>100</PageSize></Paging>",
)

INFO_REPLY = api_ok(
    "namecheap.domains.getInfo",
    '    <DomainGetInfoResult Status="Ok" ID="1234" DomainName="example.com" '
    'OwnerName="owner" IsOwner="true" IsPremium="false">\n'
    "      <DomainDetails>\n"
    "        <CreatedDate>02/15/2016</CreatedDate>\n"
    "        <ExpiredDate>02/15/2027</ExpiredDate>\n"
    "        <NumYears>0</NumYears>\n"
    "      </DomainDetails>\n"
    '      <Whoisguard Enabled="True"><ID>53536</ID></Whoisguard>\n'
    '      <DnsDetails ProviderType="FREE" IsUsingOurDNS="true" HostCount="5" '
    'EmailType="FWD" DynamicDNSStatus="false" IsFailover="false">\n'
    "        <Nameserver>dns1.registrar-servers.com</Nameserver>\n"
    "        <Nameserver>dns2.registrar-servers.com</Nameserver>\n"
    "      </DnsDetails>\n"
    '      <Modificationrights All="true" />\n'
    "    </DomainGetInfoResult>",
)

HOSTS_REPLY = api_ok(
    "namecheap.domains.dns.getHosts",
    '    <DomainDNSGetHostsResult Domain="example.com" IsUsingOurDNS="true">\n'
    '      <host HostId="12" Name="@" Type="A" Address="1.2.3.4" MXPref="10" TTL="1800" />\n'
    '      <host HostId="14" Name="www" Type="CNAME" Address="example.com." TTL="1800" />\n'
    '      <host HostId="15" Name="@" Type="MX" Address="mail.example.com." MXPref="5" TTL="3600" />\n'
    "    </DomainDNSGetHostsResult>",
)

SET_HOSTS_REPLY = api_ok(
    "namecheap.domains.dns.setHosts",
    '    <DomainDNSSetHostsResult Domain="example.com" IsSuccess="true" />',
)

NAMESERVERS_REPLY = api_ok(
    "namecheap.domains.dns.getList",
    '    <DomainDNSGetListResult Domain="example.com" IsUsingOurDNS="false">\n'
    "      <Nameserver>ns1.cloudflare.com</Nameserver>\n"
    "      <Nameserver>ns2.cloudflare.com</Nameserver>\n"
    "    </DomainDNSGetListResult>",
)

SET_NAMESERVERS_REPLY = api_ok(
    "namecheap.domains.dns.setCustom",
    '    <DomainDNSSetCustomResult Domain="example.com" Updated="true" />',
)

DEFAULT_REPLIES: dict[str, str] = {
    "namecheap.domains.check": CHECK_REPLY,
    "namecheap.domains.getList": LIST_REPLY,
    "namecheap.domains.getInfo": INFO_REPLY,
    "namecheap.domains.dns.getHosts": HOSTS_REPLY,
    "namecheap.domains.dns.setHosts": SET_HOSTS_REPLY,
    "namecheap.domains.dns.getList": NAMESERVERS_REPLY,
    "namecheap.domains.dns.setCustom": SET_NAMESERVERS_REPLY,
}


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def config() -> NamecheapConfig:
    return NamecheapConfig(
        api_user="apiuser",
        api_key="secret-key",
        username="owner",
        client_ip="203.0.113.7",
    )


@pytest.fixture
def registrar() -> MockRegistrar:
    """Mock registrar answering every supported command successfully."""
    return MockRegistrar(dict(DEFAULT_REPLIES))


def make_client(config: NamecheapConfig, registrar: MockRegistrar) -> NamecheapClient:
    """Create a client whose HTTP calls go to the mock registrar."""
    return NamecheapClient(config, http_client=httpx.AsyncClient(transport=registrar))


@pytest.fixture
def client(config: NamecheapConfig, registrar: MockRegistrar) -> NamecheapClient:
    return make_client(config, registrar)


@pytest.fixture
def gateway(client: NamecheapClient) -> NamecheapGateway:
    return NamecheapGateway(client)
