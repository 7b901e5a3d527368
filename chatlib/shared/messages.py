import logging;
import chatlib.shared.config as config;

Log = logging.getLogger(__name__);

class MessageBundle():
    ''' Named message templates, read from the "messages" section of a config. '''
    def __init__(self, messages : dict[str, str] = None):
        self._messages = {};
        if messages != None:
            for key in messages:
                self._messages[key] = self._Join(messages[key]);

    @classmethod
    def FromConfig(cls, cfg : config.Config) -> "MessageBundle":
        if cfg == None:
            return cls();
        return cls(cfg.GetValue("messages", {}));

    @staticmethod
    def _Join(value) -> str:
        # multi line templates may be written as a list
        if isinstance(value, list):
            return "\n".join([str(line) for line in value]);
        return str(value);

    def Has(self, key : str) -> bool:
        return key in self._messages;

    def Get(self, key : str, default : str = None) -> str:
        if key in self._messages:
            return self._messages[key];
        Log.warning("Message template '%s' is missing", key);
        if default != None:
            return default;
        return key;

    def GetLines(self, key : str) -> list[str]:
        return self.Get(key).split("\n");

    def Keys(self) -> list[str]:
        return list(self._messages.keys());
