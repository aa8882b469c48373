"""
Configuration of solver and session, read from ini file
"""
import configparser


class Config:
    def __init__(self, file_name=None):
        self.file_name = file_name
        self.config = configparser.ConfigParser()
        if file_name is not None and not self.config.read(file_name):
            raise FileNotFoundError(file_name)

    def __repr__(self):
        return "Config(%r)" % self.file_name

    def _get_optional(self, section, option, getter):
        value = self.config.get(section, option, fallback=None)
        if value is None or not value.strip() or value.strip().lower() == 'none':
            return None
        return getter(section, option)

    @property
    def solver_max_length(self):
        return self.config.getint('solver', 'max_length', fallback=30)

    @property
    def solver_phase1_depth(self):
        return self.config.getint('solver', 'phase1_depth', fallback=12)

    @property
    def solver_phase2_depth(self):
        return self.config.getint('solver', 'phase2_depth', fallback=18)

    @property
    def solver_timeout(self):
        return self._get_optional('solver', 'timeout', self.config.getfloat)

    @property
    def solver_workers(self):
        return self.config.getint('solver', 'workers', fallback=1)

    @property
    def tables_cache(self):
        return self._get_optional('tables', 'cache', self.config.get)

    @property
    def scramble_length(self):
        return self.config.getint('scramble', 'length', fallback=25)

    @property
    def scramble_seed(self):
        return self._get_optional('scramble', 'seed', self.config.getint)
