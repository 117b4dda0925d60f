"""
Tools for exporting bngexport models to BNGL.

Exporting can be performed at the command-line or programmatically/interactively
from within Python.

Command-line usage
==================

At the command-line, run as follows::

    python -m bngexport.export model.py [mode [volume area]]

where ``model.py`` is a file containing a model definition (i.e., contains an
instance of ``bngexport.core.Model`` assigned to the global variable
``model``). ``mode`` is one of:

- ``bng`` (default): rates for BioNetGen
- ``nfsim``: rates for NFsim, which also needs the characteristic ``volume``
  (um^3) and ``area`` (um^2) to fold into the rates

The exported model code will be printed to standard out, allowing it to be
inspected or redirected to another file.

Interactive usage
=================

Export functionality is implemented by this module's top-level function
``export``. For example, to export the "cell_membrane" example model, first
import the model::

    from bngexport.examples.cell_membrane import model

Then import the ``export`` function from this module::

    from bngexport.export import export

Call the ``export`` function, passing the model instance and optionally the
mode::

    bngl_output = export(model)
    nfsim_output = export(model, 'nfsim', volume=0.125, area=0.5)

The output (a string) can be inspected or written to a file, e.g. as follows::

    with open('cell_membrane.bngl', 'w') as f:
        f.write(bngl_output)

Rules that cannot be represented in BNGL (e.g. reactions with reactive
surfaces) are left out and reported as warnings through the
``bngexport.export`` logger.
"""


class Exporter(object):
    """Base class for model exporters.

    The pattern for model export is: a model is passed to the exporter
    constructor and the ``export`` method on the instance is called.

    Parameters
    ----------
    model : bngexport.core.Model
        The model to export.
    docstring : string (optional)
        The header comment to include at the top of the exported file.

    Examples
    --------

    >>> from bngexport.examples.cell_membrane import model
    >>> from bngexport.export.bngl import BnglExporter
    >>> e = BnglExporter(model)
    >>> bngl_output = e.export()
    """

    def __init__(self, model, docstring=None):
        self.model = model
        """The model to export."""
        self.docstring = docstring
        """Header comment to include at the top of the exported file."""

    def export(self):
        """The export method, which must be implemented by any subclass.

        All implementations of this method are expected to return a single
        string containing the representation of the model in the desired
        format.
        """
        raise NotImplementedError()


def export(model, mode='bng', volume=None, area=None, docstring=None):
    """Top-level function for exporting a model to BNGL.

    Parameters
    ----------
    model : bngexport.core.Model
        The model to export.
    mode : string, optional
        'bng' (default) or 'nfsim'.
    volume, area : float, optional
        Characteristic volume (um^3) and area (um^2), required for 'nfsim'.
    docstring : string (optional)
        The header comment to include at the top of the exported file.
    """

    # Imported at export runtime to avoid circular imports at module loading
    from bngexport.export.bngl import BnglExporter
    e = BnglExporter(model, docstring)
    return e.export(mode=mode, volume=volume, area=area)
