"""Microservice scaffolder -- turns user selections into a project on disk.

The core (context building, recipe resolution, artifact assembly) is pure;
only ``ProjectGenerator.generate`` and the ``writer`` helpers touch the
filesystem.

Quick usage::

    from microsvc.scaffolder import GenerationOptions, ProjectGenerator

    options = GenerationOptions(
        service_name="orders-service",
        framework="express",
        aws_target="ecs",
        ci_cd="github",
        addons=["postgres"],
        target_dir="/tmp/output",
    )
    generator = ProjectGenerator(options)
    result = await generator.generate()
"""

from microsvc.scaffolder.assembler import Artifact, ArtifactAssembler
from microsvc.scaffolder.context import GenerationOptions, ProjectContext, build_context
from microsvc.scaffolder.generator import GenerationResult, ProjectGenerator
from microsvc.scaffolder.templates import TemplateRenderer

__all__ = [
    "Artifact",
    "ArtifactAssembler",
    "GenerationOptions",
    "GenerationResult",
    "ProjectContext",
    "ProjectGenerator",
    "TemplateRenderer",
    "build_context",
]
