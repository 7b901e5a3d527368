import logging
import threading;

log = logging.getLogger(__name__)

WILDCARD = "*";

class Client(object):
    def __init__(self, id : int, name : str, address : str = "", permissions = None):
        self._lock = threading.Lock();
        self._id = id;
        self._name = name;
        self._address = address;
        self._ip = address[:address.rfind(":")] if ":" in address else address;
        self._permissions = set([p.lower() for p in permissions]) if permissions != None else set();

    def GetId(self) -> int:
        return self._id;

    def GetName(self) -> str:
        return self._name;

    def GetAddress(self) -> str:
        return self._address

    def GetIp(self) -> str:
        return self._ip;

    def GetPermissions(self) -> set[str]:
        with self._lock:
            return self._permissions.copy();

    def AddPermission(self, node : str):
        with self._lock:
            self._permissions.add(node.lower());
        log.debug("Granted %s to %s", node, self._name)

    def RemovePermission(self, node : str):
        with self._lock:
            self._permissions.discard(node.lower());
        log.debug("Revoked %s from %s", node, self._name)

    """
    Permission nodes are dot separated and case insensitive.
    "*" grants everything, "chat.*" grants "chat.staff" and "chat.staff.notify" but not "chat" itself.
    """
    def HasPermission(self, node : str) -> bool:
        if node == None:
            return True;
        node = node.lower();
        with self._lock:
            if WILDCARD in self._permissions or node in self._permissions:
                return True;
            parts = node.split(".");
            for i in range(1, len(parts)):
                if ".".join(parts[:i]) + "." + WILDCARD in self._permissions:
                    return True;
        return False;

    def __repr__(self):
        s = f"{self._name} (ID : {str(self._id)}) (Name : {self._name})";
        return s
