import pytest
import yaml
from clusterwipe.core.config import Config, load_config
from clusterwipe.core.tags import DEFAULT_CLUSTER_ID_TAG_KEY

def test_load_config_defaults():
    config = load_config(None)
    assert config == Config()
    assert config.dry_run is True
    assert config.cluster_id_tag_key == DEFAULT_CLUSTER_ID_TAG_KEY

def test_load_config_from_yaml(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text(
        "cluster_id: abc\n"
        "region: eu-west-1\n"
        "dry_run: false\n"
        "tags:\n"
        "  custodian: true\n"
        "  team: infra\n"
        "  build: 42\n"
    )
    config = load_config(str(path))
    assert config.cluster_id == 'abc'
    assert config.region == 'eu-west-1'
    assert config.dry_run is False
    assert config.tags == {'custodian': 'true', 'team': 'infra', 'build': '42'}

def test_load_config_empty_file(tmp_path):
    path = tmp_path / 'empty.yaml'
    path.write_text("")
    assert load_config(str(path)) == Config()

def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / 'nope.yaml'))

def test_load_config_invalid_yaml(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text("tags: [unclosed\n")
    with pytest.raises(yaml.YAMLError):
        load_config(str(path))

def test_load_config_tags_must_be_mapping(tmp_path):
    path = tmp_path / 'tags.yaml'
    path.write_text("tags:\n  - custodian\n")
    with pytest.raises(ValueError):
        load_config(str(path))
