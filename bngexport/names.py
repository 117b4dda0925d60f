"""
Keywords and reserved parameter names of the exported BNGL.

The MCell side of a model reads several of these names back, so they must not
change.
"""

IND = '  '

BEGIN_MODEL = 'begin model'
END_MODEL = 'end model'
BEGIN_PARAMETERS = 'begin parameters'
END_PARAMETERS = 'end parameters'
BEGIN_MOLECULE_TYPES = 'begin molecule types'
END_MOLECULE_TYPES = 'end molecule types'
BEGIN_COMPARTMENTS = 'begin compartments'
END_COMPARTMENTS = 'end compartments'
BEGIN_REACTION_RULES = 'begin reaction rules'
END_REACTION_RULES = 'end reaction rules'

DEFAULT_COMPARTMENT_NAME = 'default_compartment'

ALL_MOLECULES = 'ALL_MOLECULES'
ALL_VOLUME_MOLECULES = 'ALL_VOLUME_MOLECULES'
ALL_SURFACE_MOLECULES = 'ALL_SURFACE_MOLECULES'
SPECIES_SUPERCLASSES = (ALL_MOLECULES, ALL_VOLUME_MOLECULES,
                        ALL_SURFACE_MOLECULES)

# unit conversion parameters
PARAM_THICKNESS = 'thickness'
PARAM_RATE_CONV_VOLUME = 'rate_conv_volume'
PARAM_RATE_CONV_THICKNESS = 'rate_conv_thickness'
PARAM_MCELL2BNG_VOL_CONV = 'mcell_to_bng_vol_conv'
PARAM_MCELL2BNG_SURF_CONV = 'mcell_to_bng_surf_conv'
PARAM_VOL_RXN = 'vol_rxn'
PARAM_SURF_RXN = 'surf_rxn'
MCELL_REDEFINE_PREFIX = 'MCELL_REDEFINE_'
RESERVED_PARAMETER_NAMES = (
    PARAM_THICKNESS, PARAM_RATE_CONV_VOLUME, PARAM_RATE_CONV_THICKNESS,
    PARAM_MCELL2BNG_VOL_CONV, PARAM_MCELL2BNG_SURF_CONV, PARAM_VOL_RXN,
    PARAM_SURF_RXN, MCELL_REDEFINE_PREFIX + PARAM_VOL_RXN,
    MCELL_REDEFINE_PREFIX + PARAM_SURF_RXN)

RATE_PARAM_PREFIX = 'k'
MCELL_DIFFUSION_CONSTANT_3D_PREFIX = 'MCELL_DIFFUSION_CONSTANT_3D_'
MCELL_DIFFUSION_CONSTANT_2D_PREFIX = 'MCELL_DIFFUSION_CONSTANT_2D_'
PREFIX_VOLUME = 'vol_'
PREFIX_AREA = 'area_'
