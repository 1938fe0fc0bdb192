import importlib

mod = "graphqlize"
class LazyLoader:
    """
    Lazy loader for the graphqlize functions to speed up startup time.
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item in self._mappings:
            module_name, func_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, func_name)
        else:
            return self._load_module(f"{mod}.{item}")

# Define the functions and their corresponding module paths
_mappings = {
    "convert_jsons_to_graphql": (f"{mod}.jsonstographql", "convert_jsons_to_graphql"),
    "json_schemas_to_graphql_schema": (f"{mod}.jsonstographql", "json_schemas_to_graphql_schema"),
    "build_graphql_schema": (f"{mod}.jsonstographql", "build_graphql_schema"),
    "print_graphql_types": (f"{mod}.jsonstographql", "print_graphql_types"),
    "TypeRegistry": (f"{mod}.registry", "TypeRegistry"),
    "convert": (f"{mod}.converter", "convert"),
    "convert_schema": (f"{mod}.converter", "convert_schema"),
    "convert_all": (f"{mod}.scheduler", "convert_all"),
    "map_type": (f"{mod}.typemapper", "map_type"),
    "convert_enum_from_graphql": (f"{mod}.enums", "convert_enum_from_graphql"),
    "get_convert_enum_from_graphql_code": (f"{mod}.enums", "get_convert_enum_from_graphql_code"),
    "read_schemas": (f"{mod}.validate", "read_schemas"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
