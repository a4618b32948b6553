"""Docker development environment.

Writes a Compose file with Rails, Vite and PostgreSQL services plus the
``script/dc-*`` helpers used in the post-generation instructions.
"""

from __future__ import annotations

from .base import Generator

COMPOSE_FILES: dict[str, str] = {
    "docker-compose.yml": "docker/docker-compose.yml.j2",
    "Dockerfile.dev": "docker/Dockerfile.dev.j2",
}

SCRIPTS: dict[str, str] = {
    "script/dc-up": "docker/dc-up.j2",
    "script/dc-down": "docker/dc-down.j2",
    "script/dc-shell": "docker/dc-shell.j2",
}


class DockerGenerator(Generator):
    """Generates the Docker Compose development setup."""

    name = "docker"

    async def generate(self) -> None:
        for output_name, template in COMPOSE_FILES.items():
            self.render_file(output_name, template)

        for output_name, template in SCRIPTS.items():
            self.render_file(output_name, template)
            self.toolkit.make_executable(output_name)

        self.toolkit.append_if_absent(".dockerignore", ".git\nlog/*\ntmp/*\nnode_modules\n")
