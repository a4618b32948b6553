"""Default locale, time zone and translation files."""

from __future__ import annotations

from .base import Generator
from .stack import APPLICATION_CLASS_PATTERN, APPLICATION_FILE

LOCALE_MARKER = "# appgen: i18n"


class LocaleGenerator(Generator):
    """Configures i18n defaults in ``config/application.rb``."""

    name = "locale"

    def settings(self) -> str:
        return (
            f"    {LOCALE_MARKER}\n"
            f"    config.i18n.default_locale = :{self.config.locale}\n"
            f"    config.i18n.available_locales = %i[{self.config.locale}]\n"
            f'    config.time_zone = "{self.config.timezone}"\n'
            "\n"
        )

    async def generate(self) -> None:
        if self.toolkit.exists(APPLICATION_FILE):
            self.toolkit.insert_after(
                APPLICATION_FILE,
                APPLICATION_CLASS_PATTERN,
                self.settings(),
                marker=LOCALE_MARKER,
            )

        if self.config.has_locale_templates:
            locale = self.config.locale
            self.render_file(f"config/locales/{locale}.yml", f"locales/{locale}.yml.j2")
