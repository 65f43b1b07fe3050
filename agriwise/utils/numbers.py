def format_number(value):
    """Render a quantity as entered: whole numbers without a trailing .0, others unchanged"""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
