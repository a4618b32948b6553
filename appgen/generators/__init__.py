"""appgen generators -- materialise one concern of the new application each.

Generators share a :class:`FileToolkit` bound to the application directory and
a :class:`TemplateRenderer` over the packaged ``templates/`` tree.  They run in
a fixed order; a generator may rely on files written by the ones before it.

Quick usage::

    from appgen.config import Configuration
    from appgen.generators import FileToolkit, ViteGenerator

    config = Configuration(app_name="my-blog")
    toolkit = FileToolkit(config.app_path)
    await ViteGenerator(config, toolkit).generate()
"""

from appgen.generators.base import Generator
from appgen.generators.docker import DockerGenerator
from appgen.generators.locale import LocaleGenerator
from appgen.generators.manifests import ManifestEntry, parse_entry, parse_manifest
from appgen.generators.rails_app import RailsAppGenerator
from appgen.generators.simple_form import SimpleFormGenerator
from appgen.generators.stack import StackGenerator
from appgen.generators.templates import TemplateRenderer
from appgen.generators.toolkit import FileToolkit
from appgen.generators.vite import ViteGenerator

__all__ = [
    "DockerGenerator",
    "FileToolkit",
    "Generator",
    "LocaleGenerator",
    "ManifestEntry",
    "RailsAppGenerator",
    "SimpleFormGenerator",
    "StackGenerator",
    "TemplateRenderer",
    "ViteGenerator",
    "parse_entry",
    "parse_manifest",
]
