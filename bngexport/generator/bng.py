from bngexport import names
from bngexport.compartments import (check_compartment_order,
                                    compartment_graph, order_compartments)
from bngexport.core import RxnType, classify_rxn_rule
from bngexport.logging import get_logger
from bngexport.units import check_mode, generate_rate_conversion_parameters
from bngexport.util import format_real

IND = names.IND


class BngGenerator(object):
    """
    Write the BNGL sections of a model to four text streams

    The model is only read. Each ``generate_*`` method writes one section and
    the parameters it needs; :py:func:`export_to_bngl` calls them in the
    required order.

    Parameters
    ----------
    model : bngexport.core.Model
        The model to export.
    mode : string, optional
        'bng' (default) or 'nfsim', see :py:mod:`bngexport.units`.
    volume, area : float, optional
        Characteristic volume (um^3) and area (um^2), required in 'nfsim'
        mode and ignored otherwise.
    """

    def __init__(self, model, mode='bng', volume=None, area=None):
        check_mode(mode, volume, area)
        self.model = model
        self.mode = mode
        self.volume = volume
        self.area = area
        self._logger = get_logger(__name__, model=model)

    def generate_rate_conversions(self, out_parameters):
        generate_rate_conversion_parameters(out_parameters, self.mode,
                                            self.volume, self.area)

    def generate_molecule_types(self, out_parameters, out_molecule_types):
        out_molecule_types.write(names.BEGIN_MOLECULE_TYPES + '\n')
        out_parameters.write('\n' + IND + '# diffusion constants\n')
        for mt in self.model.elem_mol_types:
            if mt.is_reactive_surface or mt.is_species_superclass:
                continue
            out_molecule_types.write(IND + mt.to_str() + '\n')
            if mt.is_surf:
                prefix = names.MCELL_DIFFUSION_CONSTANT_2D_PREFIX
            else:
                prefix = names.MCELL_DIFFUSION_CONSTANT_3D_PREFIX
            out_parameters.write('%s%s%s %s\n' % (
                IND, prefix, mt.name, format_real(mt.diffusion_constant)))
        out_molecule_types.write(names.END_MOLECULE_TYPES + '\n')

    def generate_reaction_rules(self, out_parameters, out_reaction_rules):
        """
        Write the rate parameter and body of every supported rule

        Rules that cannot be exported are left out of the reaction rules
        stream and reported in the returned text; the remaining rules are
        still written. Reactive surface rules keep their unscaled rate
        parameter.

        Returns
        -------
        string
            Newline-separated error messages, empty if every rule was
            exported.
        """
        out_reaction_rules.write(names.BEGIN_REACTION_RULES + '\n')
        out_parameters.write('\n' + IND + '# reaction rates\n')

        errors = []
        for i, rr in enumerate(self.model.rxn_rules):
            rxn_as_bngl = rr.to_str()
            rxn_type = classify_rxn_rule(rr, self.model)
            rate_param = names.RATE_PARAM_PREFIX + str(i)

            if rxn_type is RxnType.REACTIVE_SURFACE:
                # the rate stays available to the MCell side, unscaled
                out_parameters.write('%s%s %s\n' % (
                    IND, rate_param, format_real(rr.rate_constant)))
                errors.append('Export of reactions with reactive surfaces to '
                              'BNGL is not supported, error for %s.' %
                              rxn_as_bngl)
                self._logger.warning('Skipping rule %s: %s', rr.name,
                                     errors[-1])
                continue
            elif rxn_type is RxnType.UNIMOL:
                scaling = ''
            elif rxn_type in (RxnType.BIMOL_VOL, RxnType.BIMOL_VOL_SURF):
                scaling = ' / %s * %s' % (names.PARAM_MCELL2BNG_VOL_CONV,
                                          names.PARAM_VOL_RXN)
            elif rxn_type is RxnType.BIMOL_SURF_SURF:
                scaling = ' / %s * %s' % (names.PARAM_MCELL2BNG_SURF_CONV,
                                          names.PARAM_SURF_RXN)
            else:
                errors.append('Export of reaction to BNGL failed, internal '
                              'error, unexpected reaction type for %s.' %
                              rxn_as_bngl)
                self._logger.warning('Skipping rule %s: %s', rr.name,
                                     errors[-1])
                continue

            out_parameters.write('%s%s %s%s\n' % (
                IND, rate_param, format_real(rr.rate_constant), scaling))
            out_reaction_rules.write('%s%s %s\n' % (IND, rxn_as_bngl,
                                                    rate_param))

        out_reaction_rules.write(names.END_REACTION_RULES + '\n')
        return '\n'.join(errors)

    def generate_compartments(self, out_parameters, out_compartments):
        """
        Write compartment sizes and declarations, parents first

        A compartment whose size parameter would take a reserved name is
        reported in the returned text and left out, with its descendants.

        Raises
        ------
        bngexport.compartments.CompartmentHierarchyError
            If the compartments of the model do not form a forest. Nothing is
            written in that case.
        """
        graph = compartment_graph(self.model)
        order = order_compartments(self.model, graph)
        check_compartment_order(self.model, order, graph)

        out_compartments.write(names.BEGIN_COMPARTMENTS + '\n')
        out_parameters.write('\n' + IND + '# compartment sizes\n')
        errors = []
        skipped = set()
        for comp_id in order:
            comp = self.model.get_compartment(comp_id)
            if comp.name == names.DEFAULT_COMPARTMENT_NAME:
                continue

            size_name = comp.size_param_name
            # a compartment renamed after it was added can still collide
            if size_name in names.RESERVED_PARAMETER_NAMES:
                errors.append('Export of compartment %s to BNGL failed, its '
                              'size parameter %s is a reserved name.' %
                              (comp.name, size_name))
            elif comp.parent_id in skipped:
                errors.append('Export of compartment %s to BNGL failed, its '
                              'parent compartment was not exported.' %
                              comp.name)
            else:
                size = format_real(comp.get_volume_or_area())
                if comp.is_3d:
                    out_parameters.write('%s%s %s # um^3\n' % (
                        IND, size_name, size))
                    declaration = '%s 3 %s' % (comp.name, size_name)
                else:
                    out_parameters.write('%s%s %s # um^2\n' % (
                        IND, size_name, size))
                    declaration = '%s 2 %s * %s' % (comp.name, size_name,
                                                    names.PARAM_THICKNESS)

                if comp.parent_id is not None:
                    declaration += ' ' + \
                        self.model.get_compartment(comp.parent_id).name
                out_compartments.write(IND + declaration + '\n')
                continue

            skipped.add(comp_id)
            self._logger.warning('Skipping compartment %s: %s', comp.name,
                                 errors[-1])

        out_compartments.write(names.END_COMPARTMENTS + '\n')
        return '\n'.join(errors)


def export_to_bngl(model, out_parameters, out_molecule_types,
                   out_compartments, out_reaction_rules, mode='bng',
                   volume=None, area=None):
    """
    Write a model as BNGL sections to four text streams

    The parameters stream gets the unit conversion factors followed by the
    diffusion constants, the rate of each exported rule and the compartment
    sizes. Section markers (``begin molecule types`` etc.) are written to the
    other three streams, but not ``begin parameters``, so callers can add
    parameters of their own.

    Parameters
    ----------
    model : bngexport.core.Model
        The model to export; it is not modified.
    out_parameters, out_molecule_types, out_compartments, out_reaction_rules :
        Writable text streams, e.g. ``io.StringIO`` objects.
    mode : string, optional
        'bng' (default) for BioNetGen rates or 'nfsim' for NFsim rates.
    volume, area : float, optional
        Characteristic volume (um^3) and area (um^2) used in 'nfsim' mode.

    Returns
    -------
    string
        Error messages for the items that could not be exported, one per
        line. An empty string means the whole model was exported.

    Raises
    ------
    bngexport.compartments.CompartmentHierarchyError
        If the compartments do not form a forest.
    """
    gen = BngGenerator(model, mode=mode, volume=volume, area=area)
    gen._logger.debug('Exporting to BNGL in %s mode', mode)

    gen.generate_rate_conversions(out_parameters)
    gen.generate_molecule_types(out_parameters, out_molecule_types)
    errors = [gen.generate_reaction_rules(out_parameters, out_reaction_rules),
              gen.generate_compartments(out_parameters, out_compartments)]

    err_msg = '\n'.join(e for e in errors if e)
    gen._logger.debug('BNGL export finished%s',
                      ' with errors' if err_msg else '')
    return err_msg
