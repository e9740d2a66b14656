from .checksum import compute_check_digits, has_valid_checksum, iso13616_prepare, iso7064_mod97_10
from .specification import CountrySpec
from .structure import CHARACTER_CLASSES, CompiledStructure, StructureBlock, compile_structure

__all__ = [
    "CHARACTER_CLASSES",
    "CompiledStructure",
    "CountrySpec",
    "StructureBlock",
    "compile_structure",
    "compute_check_digits",
    "has_valid_checksum",
    "iso13616_prepare",
    "iso7064_mod97_10",
]
