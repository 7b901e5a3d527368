import sys
import logging
import threading
import requests
import chatlib.shared.render as render
import chatlib.shared.remoteconsole as remoteconsole
import chatlib.shared.config as config

Log = logging.getLogger(__name__)

IFACE_TYPE_CONSOLE = 0
IFACE_TYPE_RCON = 1
IFACE_TYPE_WEBHOOK = 2
IFACE_TYPE_INVALID = -1

class IChatInterface():
    def __init__(self):
        pass

    def Open(self) -> bool:
        return False

    def Close(self):
        pass

    def IsOpened(self) -> bool:
        return False

    # text is already colorized, in section sign form
    def Say(self, text : str) -> str:
        return "Not implemented"

    def Tell(self, target : str, text : str) -> str:
        return "Not implemented"

    def GetOnlinePlayers(self) -> list[str]:
        return []

    def GetType(self) -> int:
        return IFACE_TYPE_INVALID

class AChatInterface(IChatInterface):

    def __init__(self):
        self._lock = threading.Lock()
        self._isOpened = False
        self._it = self.TypeToEnum(type(self))

    def Open(self) -> bool:
        if self._isOpened:
            self.Close()
        self._isOpened = True
        return True

    def Close(self):
        if self._isOpened:
            self._isOpened = False
        super().Close()

    def IsOpened(self) -> bool:
        return self._isOpened

    def TypeToEnum(self, it : type) -> int:
        if it == ConsoleInterface:
            return IFACE_TYPE_CONSOLE
        elif it == RconInterface:
            return IFACE_TYPE_RCON
        elif it == WebhookInterface:
            return IFACE_TYPE_WEBHOOK
        else:
            return IFACE_TYPE_INVALID

    def GetType(self) -> int:
        return self._it


class ConsoleInterface(AChatInterface):
    def __init__(self, stream = None, ansi : bool = True, players : list[str] = None):
        super().__init__()
        self._stream = stream if stream != None else sys.stdout
        self._ansi = ansi
        self._players = list(players) if players != None else []

    def _Render(self, text : str) -> str:
        if self._ansi:
            return render.ToAnsi(text)
        return render.StripFormatting(text)

    def _Write(self, line : str) -> str:
        with self._lock:
            self._stream.write(line + "\n")
            self._stream.flush()
        return line

    def Say(self, text : str) -> str:
        if self.IsOpened():
            return self._Write(self._Render(text))
        return None

    def Tell(self, target : str, text : str) -> str:
        if self.IsOpened():
            return self._Write("[-> %s] %s" % (target, self._Render(text)))
        return None

    def GetOnlinePlayers(self) -> list[str]:
        return self._players.copy()


class RconInterface(AChatInterface):
    def __init__(self, ipAddress : str, port : int, password : str, timeout : float = 5.0, frameTime : float = 0.02, rate : int = 5):
        super().__init__()
        self._rcon = remoteconsole.RCON((ipAddress, port), password, timeout, frameTime, rate)

    def __del__(self):
        self.Close()

    def Open(self) -> bool:
        if self._isOpened:
            self.Close()
        try:
            self._rcon.Open()
        except remoteconsole.RconError as ex:
            Log.error("Unable to open rcon interface : %s", str(ex))
            return False
        self._isOpened = True
        return True

    def Close(self):
        if self._isOpened:
            self._rcon.Close()
        super().Close()

    def Say(self, text : str) -> str:
        if self.IsOpened():
            return self._rcon.Say(text)
        return None

    def Tell(self, target : str, text : str) -> str:
        if self.IsOpened():
            return self._rcon.Tell(target, text)
        return None

    def GetOnlinePlayers(self) -> list[str]:
        if self.IsOpened():
            return self._rcon.List()
        return []


class WebhookInterface(AChatInterface):
    ''' Posts plain text to a chat webhook, formatting is stripped since the remote side cannot render it. '''
    def __init__(self, url : str, username : str = None, timeout : float = 10.0):
        super().__init__()
        self._url = url
        self._username = username
        self._timeout = timeout

    def Open(self) -> bool:
        if self._url == None or self._url == "":
            Log.error("Webhook url is not configured.")
            return False
        return super().Open()

    def _Post(self, content : str) -> str:
        payload = {"content": content}
        if self._username != None:
            payload["username"] = self._username
        try:
            webRequest = requests.post(self._url, json = payload, timeout = self._timeout)
        except requests.RequestException as ex:
            Log.error("Web request to webhook failed : %s", str(ex))
            return None
        if webRequest.status_code >= 300:
            Log.error("Web request to webhook is failed with http code %d", webRequest.status_code)
            return None
        return content

    def Say(self, text : str) -> str:
        if self.IsOpened():
            return self._Post(render.StripFormatting(text))
        return None

    def Tell(self, target : str, text : str) -> str:
        if self.IsOpened():
            return self._Post("@%s %s" % (target, render.StripFormatting(text)))
        return None


def CreateInterface(cfg : config.Config) -> IChatInterface:
    cfgIface = cfg.GetValue("interface", "console")
    iface = None
    if cfgIface == "console":
        iface = ConsoleInterface(ansi = cfg.GetValue("interfaces.console.ansi", True),
                                 players = cfg.GetValue("interfaces.console.players", []))
    elif cfgIface == "rcon":
        iface = RconInterface(  cfg.GetValue("interfaces.rcon.address.ip", "localhost"),
                                int(cfg.GetValue("interfaces.rcon.address.port", 25575)),
                                cfg.GetValue("interfaces.rcon.password", ""),
                                cfg.GetValue("interfaces.rcon.timeout", 5.0),
                                cfg.GetValue("interfaces.rcon.frameTime", 0.02),
                                cfg.GetValue("interfaces.rcon.rate", 5))
    elif cfgIface == "webhook":
        iface = WebhookInterface(   cfg.GetValue("interfaces.webhook.url", ""),
                                    cfg.GetValue("interfaces.webhook.username", None),
                                    cfg.GetValue("interfaces.webhook.timeout", 10.0))
    else:
        Log.error("Unknown chat interface '%s'", cfgIface)
    return iface
