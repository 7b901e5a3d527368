import logging;
import chatlib.shared.colors as colors;
import chatlib.shared.placeholders as placeholders;
import chatlib.shared.client as client;
import chatlib.shared.clientmanager as clientmanager;

Log = logging.getLogger(__name__);

class Chat():
    '''
    Formats, colorizes and delivers chat messages.

    interface is any chat interface exposing Say(text) and Tell(name, text),
    clientManager provides the recipients for Broadcast.
    '''
    def __init__(self, interface, clientManager : clientmanager.ClientManager = None, prefix : str = ""):
        self._interface = interface;
        self._clientManager = clientManager if clientManager != None else clientmanager.ClientManager();
        self._prefix = prefix if prefix != None else "";

    def GetInterface(self):
        return self._interface;

    def GetClientManager(self) -> clientmanager.ClientManager:
        return self._clientManager;

    def GetPrefix(self) -> str:
        return self._prefix;

    def Color(self, message : str) -> str:
        return colors.Colorize(message);

    def RemoveColors(self, message : str) -> str:
        return colors.StripColorCodes(message);

    def Format(self, message : str, *placeholderPairs) -> str:
        return placeholders.Format(message, *placeholderPairs);

    def FormatList(self, lines : list[str], *placeholderPairs) -> list[str]:
        return placeholders.FormatList(lines, *placeholderPairs);

    def ColorList(self, lines : list[str]) -> list[str]:
        return [colors.Colorize(line) for line in lines];

    def Prepare(self, message : str, *placeholderPairs) -> str:
        ''' Applies placeholders, the prefix and colors, returns "" for an empty message. '''
        if message == None or len(message) == 0:
            return "";
        if len(placeholderPairs) > 0:
            message = placeholders.Format(message, *placeholderPairs);
        return colors.Colorize(self._prefix + message);

    def Send(self, receiver, message : str, *placeholderPairs) -> bool:
        if message == None or len(message) == 0:
            return False;
        text = self.Prepare(message, *placeholderPairs);
        name = receiver.GetName() if isinstance(receiver, client.Client) else str(receiver);
        Log.debug("Sending message to %s", name);
        # interfaces return None when nothing was delivered
        return self._interface.Tell(name, text) != None;

    def Broadcast(self, message : str, permission : str = None, *placeholderPairs, predicate = None) -> int:
        '''
        Sends the message to every tracked client holding permission (all when None) and passing predicate.
        Returns the amount of recipients the message was delivered to.
        '''
        if message == None or len(message) == 0:
            return 0;
        # prepared once, also validates placeholders before anything is sent
        text = self.Prepare(message, *placeholderPairs);
        recipients = [];
        for cl in self._clientManager.GetAllClients():
            if permission != None and not cl.HasPermission(permission):
                continue;
            if predicate != None and not predicate(cl):
                continue;
            recipients.append(cl);
        Log.debug("Broadcasting to %d of %d clients (permission %s)", len(recipients), self._clientManager.GetClientCount(), permission);
        delivered = 0;
        for cl in recipients:
            if self._interface.Tell(cl.GetName(), text) != None:
                delivered += 1;
        return delivered;

    def Announce(self, message : str, *placeholderPairs) -> bool:
        if message == None or len(message) == 0:
            return False;
        return self._interface.Say(self.Prepare(message, *placeholderPairs)) != None;
