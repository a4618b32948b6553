"""Vite + Tailwind CSS + Stimulus asset setup."""

from __future__ import annotations

from .base import Generator

DEPENDENCIES: dict[str, str] = {
    "@hotwired/stimulus": "^3.2.2",
    "@hotwired/turbo-rails": "^8.0.12",
}

DEV_DEPENDENCIES: dict[str, str] = {
    "@tailwindcss/postcss": "^4.0.0",
    "autoprefixer": "^10.4.20",
    "postcss": "^8.5.1",
    "tailwindcss": "^4.0.0",
    "vite": "^6.0.7",
}

PACKAGE_MANAGER = "yarn@4.5.3"

# relative output path -> template
TEMPLATE_FILES: tuple[tuple[str, str], ...] = (
    ("vite.config.js", "vite/vite.config.js.j2"),
    ("postcss.config.js", "vite/postcss.config.js.j2"),
    ("app/assets/stylesheets/application.css", "vite/application.css.j2"),
    ("app/assets/javascripts/application.js", "vite/application.js.j2"),
    ("app/assets/javascripts/controllers/application.js", "vite/controllers/application.js.j2"),
    ("app/assets/javascripts/controllers/hello_controller.js", "vite/controllers/hello_controller.js.j2"),
    ("app/assets/javascripts/controllers/index.js", "vite/controllers/index.js.j2"),
    ("app/helpers/vite_helper.rb", "vite/vite_helper.rb.j2"),
    ("Procfile.dev", "root/Procfile.dev.j2"),
    ("bin/dev", "bin/dev.j2"),
    (".yarnrc.yml", "root/yarnrc.yml.j2"),
    (".gitignore", "root/gitignore.j2"),
    (".env.example", "root/env.example.j2"),
    (".env", "root/env.example.j2"),
    ("app/views/layouts/application.html.erb", "app/views/layouts/application.html.erb.j2"),
)

ASSET_DIRECTORIES: tuple[str, ...] = (
    "app/assets/images",
    "app/assets/javascripts/controllers",
    "app/assets/stylesheets",
)


class ViteGenerator(Generator):
    """Sets up Vite, Tailwind CSS and Stimulus in place of the asset pipeline."""

    name = "vite"

    def scripts(self) -> dict[str, str]:
        return {
            "dev": f"vite --host 0.0.0.0 --port {self.config.vite_port}",
            "build": "vite build",
        }

    async def generate(self) -> None:
        for directory in ASSET_DIRECTORIES:
            self.toolkit.mkdir(directory)
        self.toolkit.remove("app/assets/stylesheets/application.css")

        self.toolkit.merge_structured_manifest(
            "package.json",
            dependencies=DEPENDENCIES,
            dev_dependencies=DEV_DEPENDENCIES,
            scripts=self.scripts(),
            extra={"type": "module", "packageManager": PACKAGE_MANAGER},
            skeleton={"name": self.config.app_name_dash, "private": True},
        )

        for relative_path, template in TEMPLATE_FILES:
            self.render_file(relative_path, template)
        self.toolkit.make_executable("bin/dev")
