from .step_10_check_tools import CheckToolsStep
from .step_20_load_manifest import LoadManifestStep
from .step_25_check_dependency_uris import CheckDependencyUrisStep
from .step_30_copy_buildpack import CopyBuildpackStep
from .step_40_materialize_dependencies import MaterializeDependenciesStep
from .step_50_assemble_archive import AssembleArchiveStep

__all__ = [
    "CheckToolsStep",
    "LoadManifestStep",
    "CheckDependencyUrisStep",
    "CopyBuildpackStep",
    "MaterializeDependenciesStep",
    "AssembleArchiveStep",
]
