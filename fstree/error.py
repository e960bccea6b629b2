#    CLASS TreeIdentityError
# ▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼

class TreeIdentityError(RuntimeError):
    """Raised when a controller cannot compute a valid depth or path at construction. This is a programming error: every path
    in the subtree below would be wrong too."""
    def __init__(self, msg: str = None):
        if msg is None:
            msg = f'Invalid tree identity!'
        super(TreeIdentityError, self).__init__(msg)


#    CLASS ConfigError
# ▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼

class ConfigError(RuntimeError):
    def __init__(self, cfg_path: str = None, msg: str = None):
        if msg is None:
            if cfg_path:
                msg = f'Config entry not found but is required: "{cfg_path}"'
            else:
                msg = f'Bad config!'
        super(ConfigError, self).__init__(msg)
        self.cfg_path = cfg_path
