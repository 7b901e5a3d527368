import os
import sys
import time
import logging
import argparse

import chatlib.shared.config as config
import chatlib.shared.colors as colors
import chatlib.shared.placeholders as placeholders
import chatlib.shared.render as render
import chatlib.shared.messages as messages
import chatlib.shared.chat as chat
import chatlib.shared.clientmanager as clientmanager
import chatlib.shared.remoteconsole as remoteconsole
import chatinterface

Log = logging.getLogger(__name__)

CONFIG_DEFAULT_PATH = os.path.join(os.getcwd(), "chromachatCfg.json")
ENV_DEFAULT_NAME = "chromachat.env"
# Secrets can be kept out of the config file, env name -> config path
ENV_OVERRIDES = \
{
    "RCON_PASSWORD":"interfaces.rcon.password",
    "WEBHOOK_URL":"interfaces.webhook.url"
}
CONFIG_FALLBACK = \
"""{
    "Name":"Chromachat",
    "prefix":"&8[&#55ffffChroma&8] &7",

    "interfaces":
    {
        "console":
        {
            "ansi":true,
            "players":[]
        },
        "rcon":
        {
            "address":
            {
                "ip":"localhost",
                "port":25575
            },
            "password":"rconPassword",
            "timeout":5.0,
            "frameTime":0.02,
            "rate":5
        },
        "webhook":
        {
            "url":"",
            "username":"Chromachat",
            "timeout":10.0
        }
    },
    "interface":"console",

    "permissions":
    {
    },

    "messages":
    {
        "welcome":"&aWelcome &f%player&a!",
        "restart":"&#ff5555Server restarts in &f%time"
    }
}
"""

def BuildArgparser() -> argparse.ArgumentParser:
    argparser = argparse.ArgumentParser(prog="Chromachat", description="Color and deliver chat messages with legacy and hex color codes")
    argparser.add_argument("-d", "--debug", action="store_true")
    argparser.add_argument("-lf", "--logfile", default="")
    argparser.add_argument("-c", "--config", default=CONFIG_DEFAULT_PATH)
    sub = argparser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("color", help="print a colorized message to this terminal")
    p.add_argument("text")
    p = sub.add_parser("strip", help="print a message with every color code removed")
    p.add_argument("text")
    p = sub.add_parser("format", help="apply placeholder pairs, then colorize and print")
    p.add_argument("text")
    p.add_argument("pairs", nargs="*")
    p = sub.add_parser("say", help="broadcast a message through the configured interface")
    p.add_argument("text")
    p.add_argument("pairs", nargs="*")
    p.add_argument("-p", "--permission", default=None)
    p.add_argument("-a", "--announce", action="store_true", help="send once server wide instead of per player")
    p = sub.add_parser("tell", help="send a message to one player")
    p.add_argument("player")
    p.add_argument("text")
    p.add_argument("pairs", nargs="*")
    p = sub.add_parser("message", help="send a configured message template")
    p.add_argument("key")
    p.add_argument("pairs", nargs="*")
    p.add_argument("-t", "--target", default=None)
    p.add_argument("-p", "--permission", default=None)
    return argparser

def InitLogger(args):
    loggingMode = logging.INFO
    loggingFile = ""

    if args.debug:
        loggingMode = logging.DEBUG
    if args.logfile:
        # Add timestamp to log file so they don't get overwritten
        if os.path.exists(args.logfile):
            loggingFile = args.logfile + '-' + time.strftime("%m%d%Y_%H%M%S", time.localtime(time.time()))
        else:
            loggingFile = args.logfile

    if loggingFile != "":
        logging.basicConfig(
        filename = loggingFile,
        level = loggingMode,
        filemode = 'a',
        format='%(asctime)s %(levelname)08s %(name)s %(message)s',
        )
    else:
        logging.basicConfig(
        level = loggingMode,
        format='%(asctime)s %(levelname)08s %(name)s %(message)s',
        )


class ChatService:

    STATUS_INTERFACE_ERROR = -2
    STATUS_CONFIG_ERROR = -1
    STATUS_INIT = 0
    STATUS_FINISHED = 1

    @staticmethod
    def StatusString(statusId):
        if statusId == ChatService.STATUS_INIT:
            return "Status : Initialized Ok."
        elif statusId == ChatService.STATUS_CONFIG_ERROR:
            return "Status : Error at configuration load."
        elif statusId == ChatService.STATUS_INTERFACE_ERROR:
            return "Status : Unable to open chat interface."
        elif statusId == ChatService.STATUS_FINISHED:
            return "Status : Finished."
        else:
            return "Unknown status id."

    def ValidateConfig(self, cfg : config.Config) -> bool:
        if cfg == None:
            return False
        curVar = cfg.GetValue("interface", None)
        if curVar not in ("console", "rcon", "webhook"):
            Log.error("Config value 'interface' must be console, rcon or webhook, got %s", curVar)
            return False
        if curVar == "rcon" and cfg.GetValue("interfaces.rcon.password", "") in ("", "rconPassword"):
            Log.error("Rcon password is not configured, set it in the config or RCON_PASSWORD in %s", ENV_DEFAULT_NAME)
            return False
        return True

    def __init__(self, configPath : str = CONFIG_DEFAULT_PATH, openInterface : bool = True):
        self._interface = None
        self._chat = None
        self._status = ChatService.STATUS_INIT

        self._config = config.Config.from_file(configPath, CONFIG_FALLBACK)
        if self._config == None:
            self._status = ChatService.STATUS_CONFIG_ERROR
            return
        envPath = os.path.join(os.path.dirname(os.path.abspath(configPath)), ENV_DEFAULT_NAME)
        self._config.ApplyEnv(envPath, ENV_OVERRIDES)

        if not self.ValidateConfig(self._config):
            self._status = ChatService.STATUS_CONFIG_ERROR
            return

        self._messages = messages.MessageBundle.FromConfig(self._config)
        self._clientManager = clientmanager.ClientManager()

        if openInterface:
            self._interface = chatinterface.CreateInterface(self._config)
            if self._interface == None or not self._interface.Open():
                self._status = ChatService.STATUS_INTERFACE_ERROR
                return
            self.SyncClients()

        self._chat = chat.Chat(self._interface, self._clientManager, self._config.GetValue("prefix", ""))

    def GetStatus(self) -> int:
        return self._status

    def GetChat(self) -> chat.Chat:
        return self._chat

    def GetMessages(self) -> messages.MessageBundle:
        return self._messages

    def SyncClients(self):
        names = self._interface.GetOnlinePlayers()
        self._clientManager.Sync(names, self._config.GetValue("permissions", {}))
        Log.debug("Tracking %d online players", self._clientManager.GetClientCount())

    def Finish(self):
        if self._interface != None:
            self._interface.Close()
            self._interface = None
        self._status = ChatService.STATUS_FINISHED


def RunLocal(args) -> int:
    if args.command == "color":
        print(render.ToAnsi(colors.Colorize(args.text)))
    elif args.command == "strip":
        print(colors.StripColorCodes(args.text))
    elif args.command == "format":
        print(render.ToAnsi(colors.Colorize(placeholders.Format(args.text, *args.pairs))))
    return 0

def RunRemote(args) -> int:
    service = ChatService(args.config)
    status = service.GetStatus()
    if status != ChatService.STATUS_INIT:
        Log.error("Chromachat initialize error %s", ChatService.StatusString(status))
        service.Finish()
        return 1
    chatInstance = service.GetChat()
    try:
        if args.command == "say":
            if args.announce:
                chatInstance.Announce(args.text, *args.pairs)
            else:
                sent = chatInstance.Broadcast(args.text, args.permission, *args.pairs)
                Log.info("Message delivered to %d players", sent)
        elif args.command == "tell":
            chatInstance.Send(args.player, args.text, *args.pairs)
        elif args.command == "message":
            template = service.GetMessages().Get(args.key)
            if args.target != None:
                chatInstance.Send(args.target, template, *args.pairs)
            else:
                chatInstance.Broadcast(template, args.permission, *args.pairs)
    except remoteconsole.RconError as ex:
        Log.error("Delivery failed : %s", str(ex))
        return 1
    finally:
        service.Finish()
    return 0

def main(argv = None) -> int:
    args = BuildArgparser().parse_args(argv)
    InitLogger(args)
    try:
        if args.command in ("color", "strip", "format"):
            return RunLocal(args)
        return RunRemote(args)
    except placeholders.PlaceholderError as ex:
        Log.error("Invalid placeholders : %s", str(ex))
        return 2


if __name__ == "__main__":
    sys.exit(main())
