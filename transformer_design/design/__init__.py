"""
Transformer design toolchain.

Converts electrical requirements (kVA, voltages, frequency, steel grade,
conductor, cooling class, target impedance) into a complete, physically
consistent core-type transformer design: core, windings, losses,
impedance, tank, thermal rises and bill of materials.
"""

from .models import DesignRequirements, TransformerDesign
from .profile import DEFAULT_PROFILE, DesignProfile
from .engine import compute_design, design_summary, validate_requirements
from .nameplate import Nameplate
