"""
Unit conversion factors for exported reaction rates.

MCell rate constants are in M^-1 s^-1 (bimolecular volume rules) or
um^2 N^-1 s^-1 (surface-surface rules), while BioNetGen and NFsim count
molecules in a compartment. The factors computed here convert between the two
and are written as named BNGL parameters that the rate of every exported rule
refers to.

Two modes are supported:

- ``'bng'``: rates for BioNetGen ODE/SSA simulation, using the fixed
  um^3 -> litre factor and the assumed membrane thickness.
- ``'nfsim'``: rates for NFsim, which has no notion of compartment size, so
  a characteristic volume (um^3) and area (um^2) are folded in.
"""

import collections

from scipy.constants import Avogadro

from bngexport import names
from bngexport.util import format_real

MODES = ('bng', 'nfsim')

# assumed membrane thickness, um
THICKNESS = 0.01
UM3_TO_LITRES = 1e-15

RateConversions = collections.namedtuple(
    'RateConversions', ['thickness', 'rate_conv_volume',
                        'rate_conv_thickness', 'mcell_to_bng_vol_conv',
                        'mcell_to_bng_surf_conv'])


def check_mode(mode, volume=None, area=None):
    """Validate export mode and the characteristic sizes it requires"""
    if mode not in MODES:
        raise ValueError('Export mode must be one of %s, got %s' %
                         (', '.join(MODES), repr(mode)))
    if mode == 'nfsim' and (volume is None or area is None):
        raise ValueError("Export mode 'nfsim' requires both a volume and an "
                         "area")


def rate_conversions(mode, volume=None, area=None):
    """
    Compute the rate conversion factors for an export mode

    Parameters
    ----------
    mode : string
        One of :py:data:`MODES`.
    volume : float, optional
        Characteristic volume in um^3. Only used (and required) in 'nfsim'
        mode.
    area : float, optional
        Characteristic area in um^2. Only used (and required) in 'nfsim' mode.

    Returns
    -------
    RateConversions
        The numeric values of the conversion parameters, with the names used
        in the BNGL output as field names.
    """
    check_mode(mode, volume, area)
    if mode == 'nfsim':
        rate_conv_volume = volume * UM3_TO_LITRES
        rate_conv_thickness = area * THICKNESS * UM3_TO_LITRES
    else:
        rate_conv_volume = UM3_TO_LITRES
        rate_conv_thickness = THICKNESS
    return RateConversions(
        thickness=THICKNESS,
        rate_conv_volume=rate_conv_volume,
        rate_conv_thickness=rate_conv_thickness,
        mcell_to_bng_vol_conv=Avogadro * rate_conv_volume,
        mcell_to_bng_surf_conv=rate_conv_thickness
    )


def generate_rate_conversion_parameters(out_parameters, mode, volume=None,
                                        area=None):
    """
    Write the conversion factors as BNGL parameter definitions

    Must be written before any rate parameter, since those refer to
    ``mcell_to_bng_vol_conv``, ``vol_rxn`` and the surface equivalents.

    Parameters
    ----------
    out_parameters : file-like
        Text stream receiving the parameter lines.
    mode, volume, area :
        See :py:func:`rate_conversions`.
    """
    check_mode(mode, volume, area)
    ind = names.IND

    out_parameters.write(ind + '# unit conversions\n')
    out_parameters.write('%s%s %s # um\n' % (
        ind, names.PARAM_THICKNESS, format_real(THICKNESS)))
    if mode == 'nfsim':
        out_parameters.write('%s%s %s * %s # compartment volume in litres\n' % (
            ind, names.PARAM_RATE_CONV_VOLUME, format_real(volume),
            format_real(UM3_TO_LITRES)))
        out_parameters.write(
            '%s%s %s * %s * %s # membrane volume in litres\n' % (
                ind, names.PARAM_RATE_CONV_THICKNESS, format_real(area),
                names.PARAM_THICKNESS, format_real(UM3_TO_LITRES)))
    else:
        out_parameters.write('%s%s %s # um^3 to litres\n' % (
            ind, names.PARAM_RATE_CONV_VOLUME, format_real(UM3_TO_LITRES)))
        out_parameters.write('%s%s %s # um^2 to um^3\n' % (
            ind, names.PARAM_RATE_CONV_THICKNESS, names.PARAM_THICKNESS))

    out_parameters.write('\n' + ind +
                         '# parameters to control rates in MCell and '
                         'BioNetGen\n')
    _write_conversion(out_parameters, names.PARAM_MCELL2BNG_VOL_CONV,
                      '%s * %s' % (format_real(Avogadro),
                                   names.PARAM_RATE_CONV_VOLUME),
                      names.PARAM_VOL_RXN)
    _write_conversion(out_parameters, names.PARAM_MCELL2BNG_SURF_CONV,
                      names.PARAM_RATE_CONV_THICKNESS,
                      names.PARAM_SURF_RXN)


def _write_conversion(out_parameters, conv_name, conv_expr, rxn_param):
    # the unit-valued rxn parameter is what BNGL rates are multiplied by, MCell
    # replaces it by the conversion factor through the redefine parameter
    ind = names.IND
    out_parameters.write('%s%s %s\n' % (ind, conv_name, conv_expr))
    out_parameters.write('%s%s 1\n' % (ind, rxn_param))
    out_parameters.write('%s%s%s %s\n' % (ind, names.MCELL_REDEFINE_PREFIX,
                                          rxn_param, conv_name))
