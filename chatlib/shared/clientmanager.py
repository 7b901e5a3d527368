import chatlib.shared.client as client;
import threading;

class ClientManager():
    def __init__(self):
        self._clients = [];
        self._lock = threading.Lock();
        self._nextId = 0;

    def Reset(self):
        with self._lock:
            self._clients.clear();

    def GetClientCount(self) -> int:
        with self._lock:
            return len(self._clients);

    def GetAllClients(self) -> list[client.Client]:
        with self._lock:
            return self._clients.copy();

    def GetClientById(self, id) -> client.Client:
        with self._lock:
            for cl in self._clients:
                if cl.GetId() == id:
                    return cl;
        return None;

    def GetClientByName(self, name : str) -> client.Client:
        name = name.lower();
        with self._lock:
            for cl in self._clients:
                if cl.GetName().lower() == name:
                    return cl;
        return None;

    def GetClientsWithPermission(self, node : str) -> list[client.Client]:
        return [cl for cl in self.GetAllClients() if cl.HasPermission(node)];

    def AddClient(self, cl : client.Client):
        with self._lock:
            if cl not in self._clients:
                self._clients.append(cl);
                self._nextId = max(self._nextId, cl.GetId() + 1);

    def RemoveClient(self, cl : client.Client):
        with self._lock:
            if cl in self._clients:
                self._clients.remove(cl);

    def RemoveClientById(self, id : int):
        cl = self.GetClientById(id);
        if cl != None:
            self.RemoveClient(cl);

    def Sync(self, names : list[str], permissions : dict = None) -> list[client.Client]:
        '''
        Replaces the tracked clients with the given online names, keeping existing Client objects for names still online.
        permissions maps a player name to a list of permission nodes.
        '''
        if permissions == None:
            permissions = {};
        with self._lock:
            current = {};
            for cl in self._clients:
                current[cl.GetName().lower()] = cl;
            updated = [];
            for name in names:
                existing = current.get(name.lower());
                if existing == None:
                    existing = client.Client(self._nextId, name, permissions=permissions.get(name, []));
                    self._nextId += 1;
                updated.append(existing);
            self._clients = updated;
            return updated.copy();
