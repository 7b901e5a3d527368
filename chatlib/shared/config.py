import json;
from typing import Self;
import logging;
import os;
import yaml;
from dotenv import dotenv_values;


Log = logging.getLogger(__name__);

class Config(object):
    '''
    When instantiated directly, contains the given data or an empty configuration.

    When instantiated with from_file, contains the configuration stored at the given path, JSON or YAML by extension.
    '''
    def __init__(self, data = None):
        if data == None:
            self.cfg = {};
        else:
            self.cfg = data;

    @classmethod
    def fromJSON(cls, jsonPath, default : str = None):
        return JsonConfig.from_file(jsonPath, default);

    @classmethod
    def from_file(cls, path, default : str = None):
        ext = os.path.splitext(path)[1].lower();
        if ext == ".yaml" or ext == ".yml":
            return YamlConfig.from_file(path, default);
        else:
            return JsonConfig.from_file(path, default);

    @classmethod
    def FromString(cls, target : str, format : str = "json") -> Self:
        fmt = "json";
        if format != None:
            fmt = format.lower();
        if fmt == "yaml" or fmt == "yml":
            return YamlConfig.from_string(target);
        else:
            return JsonConfig.from_string(target);

    def GetValue(self, paramName : str, defaultValue : any):
        ''' paramName may be a dotted path into nested sections, "rcon.port". '''
        node = self.cfg;
        for part in paramName.split("."):
            if isinstance(node, dict) and part in node:
                node = node[part];
            else:
                Log.debug(f"Config parameter '{paramName}' not found, using default value: {defaultValue}")
                return defaultValue;
        Log.debug(f"Retrieved config value for '{paramName}': {node}")
        return node;

    def SetValue(self, paramName : str, value : any):
        node = self.cfg;
        parts = paramName.split(".");
        for part in parts[:-1]:
            if not isinstance(node.get(part), dict):
                node[part] = {};
            node = node[part];
        node[parts[-1]] = value;

    def ApplyEnv(self, envPath : str, mapping : dict[str, str]) -> int:
        '''
        Overrides config values with entries of a dotenv file, mapping is env name -> dotted config path.
        Returns the amount of overridden values.
        '''
        if envPath == None or not os.path.exists(envPath):
            Log.debug(f"Env file not found: {envPath}, skipping overrides")
            return 0;
        values = dotenv_values(envPath);
        applied = 0;
        for envName in mapping:
            value = values.get(envName);
            if value != None and value != "":
                self.SetValue(mapping[envName], value);
                applied += 1;
                Log.debug(f"Config value '{mapping[envName]}' overridden from {envPath}")
        return applied;

    @staticmethod
    def _WriteFallback(path, default : str):
        Log.info(f"Creating default config file: {path}")
        with open(path, "wt") as f:
            f.write(default);


class JsonConfig(Config):
    @classmethod
    def from_file(cls, jsonPath, default : str = None):
        try:
            Log.debug(f"Attempting to load config from: {jsonPath}")
            with open(jsonPath) as file:
                config = json.load(file);
                instance = cls(config);
                Log.info(f"Successfully loaded config from: {jsonPath}")
                return instance;
        except FileNotFoundError:
            Log.warning(f"Config file not found: {jsonPath}")
        except json.JSONDecodeError as e:
            Log.error(f"Invalid JSON in config file {jsonPath}: {e}")
        if default == None:
            return None;
        instance = cls.from_string(default);
        cls._WriteFallback(jsonPath, default);
        return instance;

    @classmethod
    def from_string(cls, target : str) -> Self:
        if target != None:
            try:
                Log.debug("Creating config from JSON string")
                return cls(json.loads(target));
            except json.JSONDecodeError as e:
                Log.error(f"Invalid JSON string provided: {e}")
                return None;
        Log.warning("Attempted to create config from None JSON string")
        return None;


class YamlConfig(Config):
    @classmethod
    def from_file(cls, yamlPath, default : str = None):
        try:
            Log.debug(f"Attempting to load config from: {yamlPath}")
            with open(yamlPath) as file:
                config = yaml.safe_load(file);
                if config == None:
                    config = {};
                Log.info(f"Successfully loaded config from: {yamlPath}")
                return cls(config);
        except FileNotFoundError:
            Log.warning(f"Config file not found: {yamlPath}")
        except yaml.YAMLError as e:
            Log.error(f"Invalid YAML in config file {yamlPath}: {e}")
        if default == None:
            return None;
        instance = cls.from_string(default);
        cls._WriteFallback(yamlPath, default);
        return instance;

    @classmethod
    def from_string(cls, target : str) -> Self:
        if target != None:
            try:
                Log.debug("Creating config from YAML string")
                config = yaml.safe_load(target);
                if config == None:
                    config = {};
                return cls(config);
            except yaml.YAMLError as e:
                Log.error(f"Error creating config from YAML string: {e}")
                return None;
        Log.warning("Attempted to create config from None YAML string")
        return None;
