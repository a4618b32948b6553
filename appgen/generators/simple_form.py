"""SimpleForm with Tailwind CSS styling."""

from __future__ import annotations

from .base import Generator

SIMPLE_FORM_GEM = 'gem "simple_form"'


class SimpleFormGenerator(Generator):
    """Adds SimpleForm and a Tailwind-flavoured initializer."""

    name = "simple_form"

    async def generate(self) -> None:
        self.toolkit.merge_manifest_list("Gemfile", [SIMPLE_FORM_GEM])
        self.render_file("config/initializers/simple_form.rb", "simple_form/simple_form.rb.j2")
