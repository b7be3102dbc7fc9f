from ruamel.yaml import YAML

def get_yaml_instance() -> YAML:
    # round-trip loading follows YAML 1.2, the workflow "on" key stays a string
    yaml = YAML(typ="rt")
    yaml.default_flow_style = False
    yaml.explicit_start = False
    yaml.preserve_quotes = True
    yaml.width = 4096
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml
