UNNAMED = "Unnamed"


class SgpaValidationError(ValueError):
    """Base class for input the calculators refuse to evaluate."""

    def __init__(self, message: str, subject_name: str = ""):
        super().__init__(message)
        self.message = message
        self.subject_name = subject_name or UNNAMED


class InvalidCredit(SgpaValidationError):
    def __init__(self, subject_name: str):
        label = subject_name or UNNAMED
        super().__init__(f'Invalid credit for subject "{label}".', subject_name)


class WeightMismatch(SgpaValidationError):
    def __init__(self, subject_name: str):
        label = subject_name or UNNAMED
        super().__init__(f'Total weightage for "{label}" must be 100.', subject_name)


class InvalidMarks(SgpaValidationError):
    def __init__(self, subject_name: str, detail: str = "Obtained cannot be greater than total."):
        label = subject_name or UNNAMED
        super().__init__(f'Invalid marks for "{label}". {detail}', subject_name)


class InvalidTotal(SgpaValidationError):
    def __init__(self, subject_name: str):
        label = subject_name or UNNAMED
        super().__init__(
            f'Total marks for pending components of "{label}" must be positive.',
            subject_name,
        )


class NoCredits(SgpaValidationError):
    def __init__(self):
        super().__init__("Total credits cannot be zero.")


class InvalidTarget(SgpaValidationError):
    def __init__(self):
        super().__init__("Please enter a valid desired SGPA between 0 and 10.")
