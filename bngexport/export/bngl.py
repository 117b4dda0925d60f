"""
Module containing a class for exporting a model to BNGL.

Serves as a wrapper around :py:func:`bngexport.generator.bng.export_to_bngl`,
assembling its four sections into one document.

For information on how to use the model exporters, see the documentation
for :py:mod:`bngexport.export`.
"""

from io import StringIO

from bngexport import names
from bngexport.export import Exporter
from bngexport.generator.bng import export_to_bngl
from bngexport.logging import get_logger


class BnglExporter(Exporter):
    """A class for returning the BNGL for a given model.

    Inherits from :py:class:`bngexport.export.Exporter`.

    Attributes
    ----------
    error_message : string
        Errors from the last call to :py:meth:`export`, one per line. Empty
        if everything was exported.
    """

    def __init__(self, model, docstring=None):
        super(BnglExporter, self).__init__(model, docstring)
        self.error_message = ''
        self._logger = get_logger(__name__, model=model)

    def export(self, mode='bng', volume=None, area=None):
        """Generate the corresponding BNGL for the model associated with the
        exporter.

        Parameters
        ----------
        mode : string, optional
            'bng' (default) or 'nfsim'.
        volume, area : float, optional
            Characteristic volume (um^3) and area (um^2), required for
            'nfsim'.

        Returns
        -------
        string
            The BNGL output for the model.
        """
        out_parameters = StringIO()
        out_molecule_types = StringIO()
        out_compartments = StringIO()
        out_reaction_rules = StringIO()

        self.error_message = export_to_bngl(
            self.model, out_parameters, out_molecule_types, out_compartments,
            out_reaction_rules, mode=mode, volume=volume, area=area)
        if self.error_message:
            self._logger.warning('Model was exported partially:\n%s',
                                 self.error_message)

        bngl_str = ''
        if self.docstring:
            bngl_str += '# ' + self.docstring.replace('\n', '\n# ') + '\n'
        bngl_str += names.BEGIN_MODEL + '\n'
        bngl_str += names.BEGIN_PARAMETERS + '\n'
        bngl_str += out_parameters.getvalue()
        bngl_str += names.END_PARAMETERS + '\n\n'
        bngl_str += out_molecule_types.getvalue() + '\n'
        bngl_str += out_compartments.getvalue() + '\n'
        bngl_str += out_reaction_rules.getvalue()
        bngl_str += names.END_MODEL + '\n'
        return bngl_str
