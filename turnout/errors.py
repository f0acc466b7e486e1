""" Error taxonomy for the turnout report. All of these abort the run. """


class TurnoutError(Exception):
    """ Base class for fatal pipeline errors. """


class SchemaMismatch(TurnoutError):
    """
    Raised when an expected column is absent, or when the covariate schema
    a model was fitted on differs from the one it is asked to score.
    """


class UnitAmbiguity(TurnoutError):
    """
    Raised when a percentage column holds a value outside [0, 100] after
    harmonization, which means a proportion/percentage conversion went wrong.
    """


class InsufficientData(TurnoutError):
    """
    Raised when the training table is too small for the configured
    number of cross-validation folds.
    """
