"""Solid Cache/Queue/Cable stack and multi-database setup."""

from __future__ import annotations

from .base import Generator

GEMS: tuple[str, ...] = (
    'gem "solid_cache"',
    'gem "solid_queue"',
    'gem "solid_cable"',
    'gem "dotenv-rails"',
)

# Translations for non-English locales.
I18N_GEM = 'gem "rails-i18n", "~> 8.0"'

APPLICATION_FILE = "config/application.rb"
APPLICATION_CLASS_PATTERN = r"class Application < Rails::Application\n"

STACK_MARKER = "# appgen: database"
STACK_SETTINGS = f"""    {STACK_MARKER}
    config.active_record.schema_format = :sql
    config.generators do |g|
      g.orm :active_record, primary_key_type: :uuid
    end

"""


class StackGenerator(Generator):
    """Adds the PostgreSQL-backed Solid gems and the multi-database config."""

    name = "solid stack"

    async def generate(self) -> None:
        gems = list(GEMS)
        if self.config.locale != "en":
            gems.append(I18N_GEM)
        self.toolkit.merge_manifest_list("Gemfile", gems)

        self.render_file("config/database.yml", "stack/database.yml.j2")

        if self.toolkit.exists(APPLICATION_FILE):
            self.toolkit.insert_after(
                APPLICATION_FILE,
                APPLICATION_CLASS_PATTERN,
                STACK_SETTINGS,
                marker=STACK_MARKER,
            )
