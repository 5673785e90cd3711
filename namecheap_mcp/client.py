"""
Namecheap Registrar Client

Issues authenticated commands against the Namecheap XML API and maps the
scraped replies into registrar models.

Every operation follows the same path:
1. Build the command query parameters (credentials + command-specific values)
2. Issue a single GET request
3. Check the reply for transport and registrar errors
4. Scrape and map the fields

Operations never raise for expected failures. They return an
OperationResult carrying either the mapped value or an OperationFailure /
InvalidDomain describing what went wrong.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from . import scraper
from .config import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, HTTP_TIMEOUT_SECONDS, NamecheapConfig
from .errors import InvalidDomain, OperationFailure
from .models import DnsDetails, DNSHost, DomainCheckResult, DomainInfo, OperationResult

logger = logging.getLogger(__name__)


def split_domain(domain: str) -> tuple[str, str]:
    """
    Split a domain into (SLD, TLD) on its last dot.

    Only the final label is taken as the TLD, so ``foo.bar.com`` becomes
    ``("foo.bar", "com")``.

    Raises:
        InvalidDomain: If the domain contains no dot.
    """
    sld, dot, tld = domain.rpartition(".")
    if not dot:
        raise InvalidDomain(domain)
    return sld, tld


def _is_true(value: str | None) -> bool:
    return value is not None and value.strip().lower() == "true"


class NamecheapClient:
    """
    Async client for the Namecheap XML API.

    The HTTP client is created lazily unless one is injected, which is how
    tests substitute a mock transport.
    """

    def __init__(
        self,
        config: NamecheapConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self.base_url = config.api_url
        self._client = http_client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS)
        return self._client

    async def close(self) -> None:
        """Clean up HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def build_params(
        self, command: str, extra: dict[str, str] | None = None
    ) -> dict[str, str]:
        """Build the query parameters for a registrar command."""
        params = {
            "ApiUser": self.config.api_user,
            "ApiKey": self.config.api_key,
            "UserName": self.config.username,
            "ClientIp": self.config.client_ip,
            "Command": command,
        }
        params.update(extra or {})
        return params

    async def _execute(
        self, command: str, extra: dict[str, str], action: str
    ) -> OperationResult[str]:
        """
        Run one registrar command and return the raw XML reply.

        Transport errors, non-2xx replies and <Error> blocks in the reply all
        become an OperationFailure prefixed with ``action``.
        """
        logger.debug("Calling %s with %s", command, sorted(extra))

        try:
            response = await self.client.get(
                self.base_url, params=self.build_params(command, extra)
            )
        except httpx.TimeoutException as e:
            logger.warning("%s timed out", command)
            return OperationResult.failure(
                OperationFailure(
                    f"{action}: request timed out after {HTTP_TIMEOUT_SECONDS:g}s",
                    cause=e,
                )
            )
        except httpx.HTTPError as e:
            logger.warning("%s failed: %s", command, e)
            return OperationResult.failure(
                OperationFailure(f"{action}: {e!s}", cause=e)
            )

        if not response.is_success:
            logger.warning("%s returned HTTP %d", command, response.status_code)
            return OperationResult.failure(
                OperationFailure(
                    f"{action}: HTTP {response.status_code}",
                    status_code=response.status_code,
                )
            )

        xml = response.text
        error = scraper.error_info(xml)
        if error is not None:
            logger.warning(
                "%s reported API error %s: %s", command, error.number, error.message
            )
            return OperationResult.failure(
                OperationFailure(
                    f"{action}: API Error {error.number}: {error.message}",
                    registrar_error=error,
                    status_code=response.status_code,
                )
            )

        return OperationResult.success(xml)

    # -------------------------------------------------------------------------
    # Domain Availability & Portfolio
    # -------------------------------------------------------------------------

    async def check_domain(
        self, domains: Sequence[str]
    ) -> OperationResult[list[DomainCheckResult]]:
        """Check availability of all domains in one batch request."""
        reply = await self._execute(
            "namecheap.domains.check",
            {"DomainList": ",".join(domains)},
            "Failed to check domains",
        )
        if not reply.ok:
            return OperationResult.failure(reply.error)

        body = scraper.command_response_body(reply.value)
        results: list[DomainCheckResult] = []
        for element in scraper.elements(body, "DomainCheckResult"):
            is_premium = _is_true(scraper.attribute(element, "IsPremiumName"))
            error_no = scraper.attribute(element, "ErrorNo")
            error_message = None
            if error_no and error_no != "0":
                error_message = (
                    scraper.attribute(element, "Description") or "Error checking domain"
                )

            results.append(
                DomainCheckResult(
                    domain=scraper.attribute(element, "Domain") or "",
                    available=_is_true(scraper.attribute(element, "Available")),
                    errorMessage=error_message,
                    isPremiumName=is_premium,
                    premiumRegistrationPrice=(
                        scraper.attribute(element, "PremiumRegistrationPrice") or None
                        if is_premium
                        else None
                    ),
                )
            )
        return OperationResult.success(results)

    async def list_domains(
        self, page: int = DEFAULT_PAGE, page_size: int = DEFAULT_PAGE_SIZE
    ) -> OperationResult[list[str]]:
        reply = await self._execute(
            "namecheap.domains.getList",
            {"Page": str(page), "PageSize": str(page_size)},
            "Failed to list domains",
        )
        if not reply.ok:
            return OperationResult.failure(reply.error)

        body = scraper.command_response_body(reply.value)
        domains = []
        for element in scraper.elements(body, "Domain"):
            name = scraper.attribute(element, "Name")
            if name:
                domains.append(name)
        return OperationResult.success(domains)

    async def get_domain_info(self, domain: str) -> OperationResult[DomainInfo]:
        """Fetch ownership, DNS and lifetime details for a domain."""
        reply = await self._execute(
            "namecheap.domains.getInfo",
            {"DomainName": domain},
            "Failed to get domain info",
        )
        if not reply.ok:
            return OperationResult.failure(reply.error)

        body = scraper.command_response_body(reply.value)
        result_tags = scraper.elements(body, "DomainGetInfoResult")
        if not result_tags:
            return OperationResult.failure(
                OperationFailure(
                    "Failed to get domain info: reply has no DomainGetInfoResult"
                )
            )
        result = result_tags[0]

        dns_details = None
        dns_tags = scraper.elements(body, "DnsDetails")
        if dns_tags:
            dns_body = scraper.element_text(body, "DnsDetails") or ""
            dns_details = DnsDetails(
                providerType=scraper.attribute(dns_tags[0], "ProviderType") or "",
                isUsingOurDNS=_is_true(scraper.attribute(dns_tags[0], "IsUsingOurDNS")),
                nameservers=scraper.element_texts(dns_body, "Nameserver"),
            )

        rights = scraper.elements(body, "Modificationrights")

        return OperationResult.success(
            DomainInfo(
                domainName=scraper.attribute(result, "DomainName") or domain,
                ownerName=scraper.attribute(result, "OwnerName") or "",
                isOwner=_is_true(scraper.attribute(result, "IsOwner")),
                isPremium=_is_true(scraper.attribute(result, "IsPremium")),
                dnsDetails=dns_details,
                modificationRights=bool(rights)
                and _is_true(scraper.attribute(rights[0], "All")),
                created=scraper.element_text(body, "CreatedDate") or "",
                expires=scraper.element_text(body, "ExpiredDate") or "",
            )
        )

    # -------------------------------------------------------------------------
    # DNS Host Records
    # -------------------------------------------------------------------------

    async def get_dns_hosts(self, domain: str) -> OperationResult[list[DNSHost]]:
        try:
            sld, tld = split_domain(domain)
        except InvalidDomain as e:
            return OperationResult.failure(e)

        reply = await self._execute(
            "namecheap.domains.dns.getHosts",
            {"SLD": sld, "TLD": tld},
            "Failed to get DNS hosts",
        )
        if not reply.ok:
            return OperationResult.failure(reply.error)

        body = scraper.command_response_body(reply.value)
        hosts = [
            DNSHost(
                name=scraper.attribute(element, "Name") or "",
                type=scraper.attribute(element, "Type") or "",
                address=scraper.attribute(element, "Address") or "",
                mxPref=scraper.attribute(element, "MXPref") or None,
                ttl=scraper.attribute(element, "TTL") or None,
            )
            for element in scraper.elements(body, "host")
        ]
        return OperationResult.success(hosts)

    async def set_dns_hosts(
        self, domain: str, hosts: Sequence[DNSHost]
    ) -> OperationResult[bool]:
        """
        Replace every host record of a domain with ``hosts``.

        This is not a delta: records missing from ``hosts`` are removed, and
        an empty sequence clears the zone.
        """
        try:
            sld, tld = split_domain(domain)
        except InvalidDomain as e:
            return OperationResult.failure(e)

        params = {"SLD": sld, "TLD": tld}
        for i, host in enumerate(hosts, start=1):
            params[f"HostName{i}"] = host.name
            params[f"RecordType{i}"] = host.type
            params[f"Address{i}"] = host.address
            if host.mxPref:
                params[f"MXPref{i}"] = host.mxPref
            if host.ttl:
                params[f"TTL{i}"] = host.ttl

        reply = await self._execute(
            "namecheap.domains.dns.setHosts", params, "Failed to set DNS hosts"
        )
        if not reply.ok:
            return OperationResult.failure(reply.error)

        logger.info("Replaced DNS hosts for %s with %d record(s)", domain, len(hosts))
        return OperationResult.success(True)

    # -------------------------------------------------------------------------
    # Nameservers
    # -------------------------------------------------------------------------

    async def get_nameservers(self, domain: str) -> OperationResult[list[str]]:
        try:
            sld, tld = split_domain(domain)
        except InvalidDomain as e:
            return OperationResult.failure(e)

        reply = await self._execute(
            "namecheap.domains.dns.getList",
            {"SLD": sld, "TLD": tld},
            "Failed to get nameservers",
        )
        if not reply.ok:
            return OperationResult.failure(reply.error)

        body = scraper.command_response_body(reply.value)
        return OperationResult.success(
            [ns for ns in scraper.element_texts(body, "Nameserver") if ns]
        )

    async def set_nameservers(
        self, domain: str, nameservers: Sequence[str]
    ) -> OperationResult[bool]:
        try:
            sld, tld = split_domain(domain)
        except InvalidDomain as e:
            return OperationResult.failure(e)

        reply = await self._execute(
            "namecheap.domains.dns.setCustom",
            {"SLD": sld, "TLD": tld, "Nameservers": ",".join(nameservers)},
            "Failed to set nameservers",
        )
        if not reply.ok:
            return OperationResult.failure(reply.error)

        logger.info("Set nameservers for %s to %s", domain, ", ".join(nameservers))
        return OperationResult.success(True)
