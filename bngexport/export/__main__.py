import os
import sys
import re
import bngexport.export
from bngexport.units import MODES


def validate_argv(argv):
    if len(argv) == 2:
        return True
    if len(argv) == 3:
        # nfsim needs the characteristic volume and area
        return argv[2] == 'bng'
    return len(argv) == 5 and argv[2] in MODES


def main(argv):
    if not validate_argv(argv):
        print(bngexport.export.__doc__, end=' ')
        return 1

    model_filename = argv[1]
    mode = argv[2] if len(argv) > 2 else 'bng'
    volume = area = None
    if len(argv) == 5:
        try:
            volume = float(argv[3])
            area = float(argv[4])
        except ValueError:
            print(bngexport.export.__doc__, end=' ')
            return 1

    # Sanity checks on filename
    if not os.path.exists(model_filename):
        raise Exception("File '%s' doesn't exist" % model_filename)
    if not re.search(r'\.py$', model_filename):
        raise Exception("File '%s' is not a .py file" % model_filename)
    sys.path.insert(0, os.path.dirname(model_filename))
    model_name = re.sub(r'\.py$', '', os.path.basename(model_filename))
    # import it
    try:
        model_module = __import__(model_name)
    except Exception:
        print("Error in model script:\n")
        raise
    # grab the 'model' variable from the module
    try:
        model = model_module.__dict__['model']
    except KeyError:
        raise Exception("File '%s' isn't a model file" % model_filename)

    # Export the model
    print(bngexport.export.export(model, mode, volume, area,
                                  docstring=model_module.__doc__), end='')

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
