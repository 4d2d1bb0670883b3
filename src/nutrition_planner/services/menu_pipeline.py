"""Weekly menu generation - the single entry point per generate request."""

import asyncio
import logging
import weakref
from collections.abc import Callable

from nutrition_planner.config import get_settings
from nutrition_planner.errors import NotConfiguredError, ProviderError, ResponseError
from nutrition_planner.llm.base import LLMClient
from nutrition_planner.mail import MailSender
from nutrition_planner.models import Day, EmailStatus, Menu, Profile
from nutrition_planner.persistence import MenuStore
from nutrition_planner.persistence.base import user_key
from nutrition_planner.rules import CalorieModel
from nutrition_planner.services.fallback_menu import (
    WARNING_NOT_CONFIGURED,
    WARNING_PROVIDER_FAILED,
    WARNING_PROVIDER_TIMEOUT,
    WARNING_UNUSABLE_RESPONSE,
    fallback_days,
)
from nutrition_planner.services.prompt_builder import build_menu_prompt, new_entropy_token
from nutrition_planner.services.response_parser import extract_json_payload, validate_menu_payload
from nutrition_planner.services.version_sequencer import VersionSequencer

logger = logging.getLogger(__name__)

RAW_LOG_CHARS = 300


class MenuGenerationPipeline:
    """
    Calorie target -> version -> prompt -> provider -> extract -> validate -> persist -> mail.
    Generation failures never propagate: they produce the fallback menu with a warning.
    """

    def __init__(
        self,
        store: MenuStore,
        llm: LLMClient | None,
        mailer: MailSender | None = None,
        *,
        calorie_model: CalorieModel | None = None,
        timeout_seconds: float | None = None,
        max_tokens: int | None = None,
        trust_provider_version: bool | None = None,
        token_factory: Callable[[], str] = new_entropy_token,
    ) -> None:
        settings = get_settings()
        self._store = store
        self._llm = llm
        self._mailer = mailer
        self._calories = calorie_model or CalorieModel()
        self._sequencer = VersionSequencer(store)
        self._timeout = settings.llm_timeout_seconds if timeout_seconds is None else timeout_seconds
        self._max_tokens = max_tokens or settings.llm_max_tokens
        self._trust_provider_version = (
            settings.trust_provider_version if trust_provider_version is None else trust_provider_version
        )
        self._token_factory = token_factory
        self._user_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()
        self._pending_mail: set[asyncio.Task] = set()

    def _lock_for(self, email: str) -> asyncio.Lock:
        lock = self._user_locks.get(email)
        if lock is None:
            lock = asyncio.Lock()
            self._user_locks[email] = lock
        return lock

    async def generate(self, email: str, profile: Profile) -> dict:
        """Produce, persist and return (client view) exactly one new menu for the user."""
        daily_calories = self._calories.daily_calories(profile)

        # Version read and menu save must not interleave for the same user.
        async with self._lock_for(user_key(email)):
            version = self._sequencer.next_version(email)
            prompt = build_menu_prompt(profile, daily_calories, version, self._token_factory())
            days, final_version, warning = await self._generate_days(prompt, profile, version)
            menu = Menu(
                email=email,
                version=final_version,
                daily_calories=daily_calories,
                days=days,
                warning=warning,
            )
            self._store.save_menu(menu)

        logger.info(
            "Saved menu v%d for %s (%d days, %d kcal%s)",
            menu.version,
            email,
            len(menu.days),
            daily_calories,
            ", fallback" if warning else "",
        )
        email_status = self._dispatch_email(menu)
        return menu.client_view(email_status)

    async def _generate_days(
        self,
        prompt: str,
        profile: Profile,
        version: int,
    ) -> tuple[list[Day], int, str | None]:
        """Provider days and version, or fallback days, sequenced version and a warning."""
        if self._llm is None or not self._llm.is_configured:
            logger.warning("AI provider not configured, using fallback menu")
            return fallback_days(profile), version, WARNING_NOT_CONFIGURED

        try:
            raw = await asyncio.wait_for(
                self._llm.generate(prompt, max_tokens=self._max_tokens),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("AI provider timed out after %ss, using fallback menu", self._timeout)
            return fallback_days(profile), version, WARNING_PROVIDER_TIMEOUT
        except NotConfiguredError as e:
            logger.warning("AI provider not configured (%s), using fallback menu", e)
            return fallback_days(profile), version, WARNING_NOT_CONFIGURED
        except ProviderError as e:
            logger.error("AI provider error, using fallback menu: %s", e)
            return fallback_days(profile), version, WARNING_PROVIDER_FAILED
        except Exception as e:
            logger.exception("Unexpected AI provider failure, using fallback menu: %s", e)
            return fallback_days(profile), version, WARNING_PROVIDER_FAILED

        logger.debug("AI raw output (first %d chars): %s", RAW_LOG_CHARS, str(raw)[:RAW_LOG_CHARS])
        try:
            validated = validate_menu_payload(extract_json_payload(raw))
        except ResponseError as e:
            logger.warning("Unusable AI response, using fallback menu: %s", e)
            return fallback_days(profile), version, WARNING_UNUSABLE_RESPONSE
        except Exception as e:
            logger.exception("Unexpected failure reading AI response, using fallback menu: %s", e)
            return fallback_days(profile), version, WARNING_UNUSABLE_RESPONSE

        return validated.days, self._resolve_version(version, validated.provider_version), None

    def _resolve_version(self, sequenced: int, reported: int | None) -> int:
        """Sequenced version wins unless trusted provider versions are enabled and not lower."""
        if reported is None or reported == sequenced:
            return sequenced
        if self._trust_provider_version and reported > sequenced:
            logger.info("Using provider-reported version %d instead of %d", reported, sequenced)
            return reported
        logger.warning("Ignoring provider-reported version %d, using %d", reported, sequenced)
        return sequenced

    def _dispatch_email(self, menu: Menu) -> EmailStatus:
        """Start the send in the background. The request never waits for it."""
        if self._mailer is None or not self._mailer.is_configured:
            return EmailStatus.NOT_CONFIGURED
        task = asyncio.create_task(self._send_menu_email(menu))
        self._pending_mail.add(task)
        task.add_done_callback(self._pending_mail.discard)
        return EmailStatus.QUEUED

    async def _send_menu_email(self, menu: Menu) -> EmailStatus:
        try:
            ok = await self._mailer.send(menu.email, menu.email_subject(), menu.to_plain_text())
        except Exception as e:
            logger.exception("Menu email to %s failed: %s", menu.email, e)
            ok = False
        status = EmailStatus.SENT if ok else EmailStatus.FAILED
        logger.info("Menu v%d email to %s: %s", menu.version, menu.email, status.value)
        return status

    async def drain(self) -> list[EmailStatus]:
        """Wait for outstanding email sends. Used at shutdown."""
        if not self._pending_mail:
            return []
        return list(await asyncio.gather(*self._pending_mail))
