"""Tests for check URL decoding, domain and field validation."""

from urllib.parse import quote

import pytest

from conftest import (
    CRTD,
    ENCODED_CHECK_URL,
    IIC,
    IP_CHECK_URL,
    MAPR_CHECK_URL,
    SERBIAN_CHECK_URL,
    TIN,
    make_check_url,
)
from spend_lens.domain.check_url import (
    decode_check_url,
    parse_check_url,
    url_origin,
    validate_domain,
    validate_fields,
    verify_check_url,
)
from spend_lens.domain.errors import (
    CrtdInvalidError,
    FieldFormatError,
    IicInvalidError,
    MalformedUrlError,
    TinInvalidError,
    UnsupportedForeignSchemeError,
    UntrustedOriginError,
)
from spend_lens.domain.models import FiscalField, TaxScheme


class TestDecodeCheckUrl:
    """Tests for percent-decoding."""

    def test_decodes_percent_escapes(self):
        decoded = decode_check_url(ENCODED_CHECK_URL)
        assert "crtd=2023-02-09T13:25:58+01:00" in decoded

    def test_keeps_plus_sign(self):
        """A literal + is not turned into a space."""
        assert decode_check_url(MAPR_CHECK_URL) == MAPR_CHECK_URL

    def test_is_idempotent_on_decoded_input(self):
        once = decode_check_url(ENCODED_CHECK_URL)
        assert decode_check_url(once) == once


class TestOrigin:
    """Tests for origin serialization."""

    def test_default_port_is_omitted(self):
        assert url_origin(parse_check_url("https://mapr.tax.gov.me:443/ic/")) == "https://mapr.tax.gov.me"

    def test_explicit_port_is_kept(self):
        assert url_origin(parse_check_url("https://mapr.tax.gov.me:8443/ic/")) == "https://mapr.tax.gov.me:8443"

    def test_host_is_lowercased(self):
        assert url_origin(parse_check_url("HTTPS://MAPR.Tax.Gov.ME/ic/")) == "https://mapr.tax.gov.me"


class TestValidateDomain:
    """Tests for the tax authority allow-list."""

    @pytest.mark.parametrize("url", [MAPR_CHECK_URL, IP_CHECK_URL])
    def test_accepts_authority_origins(self, url):
        assert validate_domain(url) is TaxScheme.MONTENEGRO

    def test_accepts_default_port(self):
        assert validate_domain("https://mapr.tax.gov.me:443/ic/") is TaxScheme.MONTENEGRO

    @pytest.mark.parametrize("url", [
        "a_wrong_url/http",
        "mapr.tax.gov.me/ic/#/verify",
        "https:///ic/#/verify",
        "https://mapr.tax.gov.me:port/ic/",
        "",
    ])
    def test_rejects_malformed_urls(self, url):
        with pytest.raises(MalformedUrlError) as exc_info:
            validate_domain(url)
        assert exc_info.value.code == "malformed_check_url"

    def test_rejects_serbian_scheme_distinctly(self):
        with pytest.raises(UnsupportedForeignSchemeError) as exc_info:
            validate_domain(SERBIAN_CHECK_URL)

        error = exc_info.value
        assert not isinstance(error, UntrustedOriginError)
        assert error.scheme is TaxScheme.SERBIA
        assert error.origin == "https://suf.purs.gov.rs"
        assert error.code == "serbian_checks_not_supported_yet"

    @pytest.mark.parametrize("origin", [
        "https://example.com",
        "http://mapr.tax.gov.me",
        "https://mapr.tax.gov.me:8443",
        "https://mapr.tax.gov.me.evil.com",
        "http://213.149.97.151",
        "https://213.149.97.152",
        "http://suf.purs.gov.rs",
    ])
    def test_rejects_unknown_origins(self, origin):
        with pytest.raises(UntrustedOriginError) as exc_info:
            validate_domain(make_check_url(origin=origin))

        assert exc_info.value.origin == origin
        assert exc_info.value.code == "wrong_check_url"


class TestValidateFields:
    """Tests for iic, tin and crtd format checks."""

    def test_accepts_fragment_parameters(self):
        validate_fields(MAPR_CHECK_URL)

    def test_accepts_query_string_parameters(self):
        validate_fields(f"https://mapr.tax.gov.me/ic/verify?iic={IIC}&tin={TIN}&crtd={CRTD}")

    def test_accepts_lowercase_iic(self):
        validate_fields(make_check_url(iic=IIC.lower()))

    @pytest.mark.parametrize("crtd", [
        "2023-02-11T18:27:35+01:00",
        "2023-02-11T18:27:35-05:00",
        "2023-02-11T18:27:35Z",
        "2023-02-11T18:27:35",
        "2023-02-11T18:27:35.123456+01:00",
        "2023-02-11T18:27:35.1Z",
        "2023-02-11T18:27:35.",
    ])
    def test_accepts_crtd_variants(self, crtd):
        validate_fields(make_check_url(crtd=crtd))

    @pytest.mark.parametrize("iic", [
        IIC[:-1],
        IIC + "A",
        "G" + IIC[1:],
        "",
    ])
    def test_rejects_bad_iic(self, iic):
        with pytest.raises(IicInvalidError):
            validate_fields(make_check_url(iic=iic))

    @pytest.mark.parametrize("tin", ["0240428", "024042810", "0240428X", ""])
    def test_rejects_bad_tin(self, tin):
        with pytest.raises(TinInvalidError):
            validate_fields(make_check_url(tin=tin))

    @pytest.mark.parametrize("crtd", [
        "2023-02-11",
        "2023-02-11T18:27",
        "2023-02-11 18:27:35",
        "11.02.2023T18:27:35",
        "",
    ])
    def test_rejects_bad_crtd(self, crtd):
        with pytest.raises(CrtdInvalidError):
            validate_fields(make_check_url(crtd=crtd))

    def test_missing_parameter_names_the_field(self):
        url = f"https://mapr.tax.gov.me/ic/#/verify?iic={IIC}&crtd={CRTD}"
        with pytest.raises(FieldFormatError) as exc_info:
            validate_fields(url)

        assert isinstance(exc_info.value, TinInvalidError)
        assert exc_info.value.field is FiscalField.TIN
        assert exc_info.value.code == "tin_param_is_missing_or_wrong_format"

    def test_prefixed_key_does_not_count(self):
        url = make_check_url().replace("?iic=", "?xiic=")
        with pytest.raises(IicInvalidError):
            validate_fields(url)

    def test_first_failing_field_wins(self):
        with pytest.raises(IicInvalidError):
            validate_fields("https://mapr.tax.gov.me/ic/")


class TestVerifyCheckUrl:
    """Tests for the combined decode, domain and field check."""

    @pytest.mark.parametrize("url", [MAPR_CHECK_URL, IP_CHECK_URL, ENCODED_CHECK_URL])
    def test_accepts_receipt_urls(self, url):
        assert verify_check_url(url) is TaxScheme.MONTENEGRO

    @pytest.mark.parametrize("url", [MAPR_CHECK_URL, IP_CHECK_URL, ENCODED_CHECK_URL])
    def test_fully_encoded_url_gives_same_result(self, url):
        decoded = decode_check_url(url)
        assert verify_check_url(quote(decoded, safe="")) is verify_check_url(decoded)

    def test_encoded_serbian_url_is_still_foreign(self):
        with pytest.raises(UnsupportedForeignSchemeError):
            verify_check_url(quote(SERBIAN_CHECK_URL, safe=""))

    def test_malformed_url(self):
        with pytest.raises(MalformedUrlError):
            verify_check_url("a_wrong_url/http")

    def test_domain_is_checked_before_fields(self):
        with pytest.raises(UntrustedOriginError):
            verify_check_url("https://example.com/no/params")

    def test_reports_bad_field_on_trusted_origin(self):
        with pytest.raises(CrtdInvalidError):
            verify_check_url(make_check_url(crtd="yesterday"))
