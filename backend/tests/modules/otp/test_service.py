import pytest
from unittest.mock import AsyncMock, patch

from modules.email import EmailDeliveryError, OTP_SUBJECT
from modules.otp import (
    InMemoryOTPStorage,
    InvalidOrExpiredOTPError,
    OTPService,
    generate_otp_code,
    normalize_email,
)


class TestGenerateOTPCode:
    def test_six_digits(self):
        """Codes should be 6-digit decimal strings."""
        for _ in range(200):
            code = generate_otp_code()
            assert len(code) == 6
            assert 100000 <= int(code) <= 999999

    def test_bounds(self):
        """Lowest and highest draws map to the range ends."""
        with patch("modules.otp.service.secrets.randbelow", return_value=0):
            assert generate_otp_code() == "100000"
        with patch("modules.otp.service.secrets.randbelow", return_value=899999):
            assert generate_otp_code() == "999999"

    def test_normalize_email(self):
        """Emails should be trimmed and lowercased."""
        assert normalize_email("  Jane.Doe@Example.COM ") == "jane.doe@example.com"


class TestIssue:
    @pytest.mark.asyncio
    async def test_stores_challenge_with_five_minute_expiry(self, otp_service, otp_storage, clock):
        """Issue should store a code expiring five minutes from now."""
        await otp_service.issue("a@x.com")

        challenge = await otp_storage.get("a@x.com")
        assert challenge is not None
        assert challenge.created_at == clock.now
        assert (challenge.expires_at - clock.now).total_seconds() == 300

    @pytest.mark.asyncio
    async def test_sends_code_by_email(self, otp_service, email_sender, issued_code):
        """The stored code should be in both email bodies."""
        await otp_service.issue("a@x.com")

        code = await issued_code("a@x.com")
        assert len(email_sender.sent) == 1
        message = email_sender.sent[0]
        assert message.to == "a@x.com"
        assert message.subject == OTP_SUBJECT
        assert code in message.html
        assert code in message.text

    @pytest.mark.asyncio
    async def test_reissue_overwrites(self, otp_service, otp_storage):
        """Only one challenge should exist per email."""
        with patch("modules.otp.service.generate_otp_code", side_effect=["111111", "222222"]):
            await otp_service.issue("a@x.com")
            await otp_service.issue("A@x.com")

        assert len(otp_storage) == 1
        assert (await otp_storage.get("a@x.com")).code == "222222"

    @pytest.mark.asyncio
    async def test_delivery_failure_does_not_fail_issue(self, otp_storage, clock, issued_code):
        """A transport error should leave a verifiable code behind."""
        sender = AsyncMock()
        sender.send.side_effect = EmailDeliveryError("sendgrid", "connection refused")
        service = OTPService(otp_storage, sender, clock=clock)

        await service.issue("a@x.com")

        result = await service.verify("a@x.com", await issued_code("a@x.com"))
        assert result.success is True

    @pytest.mark.asyncio
    async def test_unsent_code_is_logged(self, otp_storage, clock, issued_code, caplog):
        """When no email goes out, the code should be in the logs."""
        sender = AsyncMock()
        sender.send.return_value = False
        service = OTPService(otp_storage, sender, clock=clock)

        with caplog.at_level("WARNING", logger="modules.otp.service"):
            await service.issue("a@x.com")

        assert await issued_code("a@x.com") in caplog.text


class TestVerify:
    @pytest.mark.asyncio
    async def test_correct_code_is_consumed(self, otp_service, otp_storage, issued_code):
        """Correct code within the window should succeed once and be removed."""
        await otp_service.issue("a@x.com")
        code = await issued_code("a@x.com")

        result = await otp_service.verify("a@x.com", code)

        assert result.success is True
        assert result.email == "a@x.com"
        assert await otp_storage.get("a@x.com") is None

        with pytest.raises(InvalidOrExpiredOTPError) as exc_info:
            await otp_service.verify("a@x.com", code)
        assert exc_info.value.reason == InvalidOrExpiredOTPError.NOT_FOUND

    @pytest.mark.asyncio
    async def test_reissue_voids_previous_code(self, otp_service):
        """The first code should fail once a second one has been issued."""
        with patch("modules.otp.service.generate_otp_code", side_effect=["111111", "222222"]):
            await otp_service.issue("a@x.com")
            await otp_service.issue("a@x.com")

        with pytest.raises(InvalidOrExpiredOTPError):
            await otp_service.verify("a@x.com", "111111")

        result = await otp_service.verify("a@x.com", "222222")
        assert result.success is True

    @pytest.mark.asyncio
    async def test_expired_code_is_deleted(self, otp_service, otp_storage, clock, issued_code):
        """A code past its expiry should fail and be removed."""
        await otp_service.issue("a@x.com")
        code = await issued_code("a@x.com")
        clock.advance(301)

        with pytest.raises(InvalidOrExpiredOTPError) as exc_info:
            await otp_service.verify("a@x.com", code)

        assert exc_info.value.reason == InvalidOrExpiredOTPError.EXPIRED
        assert await otp_storage.get("a@x.com") is None

    @pytest.mark.asyncio
    async def test_code_valid_at_expiry_instant(self, otp_service, clock, issued_code):
        """A code should still be accepted exactly at its expiry time."""
        await otp_service.issue("a@x.com")
        code = await issued_code("a@x.com")
        clock.advance(300)

        assert (await otp_service.verify("a@x.com", code)).success is True

    @pytest.mark.asyncio
    async def test_wrong_code_keeps_challenge(self, otp_service, otp_storage, issued_code):
        """A wrong code should fail without consuming the real one."""
        with patch("modules.otp.service.generate_otp_code", return_value="123456"):
            await otp_service.issue("a@x.com")

        with pytest.raises(InvalidOrExpiredOTPError) as exc_info:
            await otp_service.verify("a@x.com", "654321")

        assert exc_info.value.reason == InvalidOrExpiredOTPError.MISMATCH
        assert (await otp_service.verify("a@x.com", "123456")).success is True

    @pytest.mark.asyncio
    async def test_verify_normalizes_email_and_code(self, otp_service):
        """Email case and code whitespace should not matter."""
        with patch("modules.otp.service.generate_otp_code", return_value="123456"):
            await otp_service.issue("Jane@Example.com")

        result = await otp_service.verify(" jane@example.COM", " 123456 ")
        assert result.email == "jane@example.com"

    @pytest.mark.asyncio
    async def test_all_failures_share_one_type(self, otp_service):
        """Callers should see one error code whatever the reason."""
        with pytest.raises(InvalidOrExpiredOTPError) as exc_info:
            await otp_service.verify("nobody@x.com", "123456")
        assert exc_info.value.code == "INVALID_OR_EXPIRED_OTP"
        assert exc_info.value.details["reason"] == "not_found"
