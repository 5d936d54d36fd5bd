"""
Materials / Standards Catalog
=============================

Static reference data consumed by the design and costing engines:
- Electrical steel grades and winding conductor materials
- Cooling classes, vector groups, load profiles, insulating oils
- Conductor size tables (AWG wire, rectangular strip)
- Unit prices for cost estimation
"""

from .materials import (
    SteelGradeId,
    SteelFamily,
    ConductorMaterialId,
    CoolingClassId,
    Connection,
    VectorGroupId,
    LoadProfileId,
    OilType,
    SteelGrade,
    ConductorMaterial,
    CoolingClass,
    VectorGroup,
    LoadProfile,
    get_steel_grade,
    get_conductor_material,
    get_cooling_class,
    get_vector_group,
    get_load_profile,
    bil_for_voltage,
    steel_guidance,
)
from .conductors import ConductorForm, ConductorSelection, select_conductor
from .pricing import TapChangerType, ManufacturingRegionId

__all__ = [
    "SteelGradeId",
    "SteelFamily",
    "ConductorMaterialId",
    "CoolingClassId",
    "Connection",
    "VectorGroupId",
    "LoadProfileId",
    "OilType",
    "SteelGrade",
    "ConductorMaterial",
    "CoolingClass",
    "VectorGroup",
    "LoadProfile",
    "get_steel_grade",
    "get_conductor_material",
    "get_cooling_class",
    "get_vector_group",
    "get_load_profile",
    "bil_for_voltage",
    "steel_guidance",
    "ConductorForm",
    "ConductorSelection",
    "select_conductor",
    "TapChangerType",
    "ManufacturingRegionId",
]
