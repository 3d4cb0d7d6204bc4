"""Tests for the group registry and OWNERS URL parsing."""

from __future__ import annotations

import pytest
import yaml

from src.owners.errors import RegistryError
from src.owners.registry import (
    OwnersLocation,
    Registry,
    owners_locations,
    owners_roots,
    validate_group_name,
)

SIGS_YAML = """\
sigs:
  - dir: sig-node
    name: Node
    mission_statement: >
      Node things.
    label: node
    leadership:
      chairs:
        - github: someone
          name: Some One
    subprojects:
      - name: kubelet
        owners:
          - https://raw.githubusercontent.com/kubernetes/kubernetes/master/pkg/kubelet/OWNERS
      - name: node-problem-detector
        owners:
          - https://raw.githubusercontent.com/kubernetes/node-problem-detector/master/OWNERS
workinggroups:
  - dir: wg-batch
    name: Batch
    subprojects:
      - name: kueue
        owners:
          - https://raw.githubusercontent.com/kubernetes-sigs/kueue/main/OWNERS
usergroups:
  - dir: ug-big-data
    name: Big Data
    subprojects:
      - name: spark
        owners:
          - https://raw.githubusercontent.com/kubernetes/spark/master/OWNERS
committees:
  - dir: committee-steering
    name: Steering
"""


class TestRegistry:
    """Test suite for sigs.yaml parsing."""

    def test_from_yaml_file(self, tmp_path) -> None:
        path = tmp_path / "sigs.yaml"
        path.write_text(SIGS_YAML)

        registry = Registry.from_yaml_file(path)

        assert [g.dir for g in registry.all_groups()] == [
            "sig-node",
            "wg-batch",
            "committee-steering",
        ]
        assert registry.find_group("sig-node").subprojects[0].name == "kubelet"
        assert registry.find_group("sig-missing") is None

    def test_owners_roots(self) -> None:
        registry = Registry.from_data(yaml.safe_load(SIGS_YAML))

        assert owners_roots(registry, "sig-node") == [
            "https://raw.githubusercontent.com/kubernetes/kubernetes/master/pkg/kubelet/OWNERS",
            "https://raw.githubusercontent.com/kubernetes/node-problem-detector/master/OWNERS",
        ]
        assert owners_roots(registry, "wg-batch") == [
            "https://raw.githubusercontent.com/kubernetes-sigs/kueue/main/OWNERS"
        ]
        assert owners_roots(registry, "committee-steering") == []
        assert owners_roots(registry, "sig-unknown") == []

    def test_user_groups_are_not_searched(self) -> None:
        registry = Registry.from_data(yaml.safe_load(SIGS_YAML))

        assert registry.find_group("ug-big-data") is None
        assert owners_roots(registry, "ug-big-data") == []

    def test_missing_file_is_registry_error(self, tmp_path) -> None:
        with pytest.raises(RegistryError):
            Registry.from_yaml_file(tmp_path / "sigs.yaml")

    def test_invalid_yaml_is_registry_error(self, tmp_path) -> None:
        path = tmp_path / "sigs.yaml"
        path.write_text("sigs: [\n")

        with pytest.raises(RegistryError):
            Registry.from_yaml_file(path)

    def test_malformed_group_is_registry_error(self) -> None:
        with pytest.raises(RegistryError):
            Registry.from_data({"sigs": [{"name": "No Dir"}]})

    def test_non_mapping_is_registry_error(self) -> None:
        with pytest.raises(RegistryError):
            Registry.from_data(["sigs"])


class TestValidateGroupName:
    """Test suite for group name validation."""

    @pytest.mark.parametrize("name", ["sig-node", "wg-batch", "committee-steering"])
    def test_valid(self, name: str) -> None:
        assert validate_group_name(name) is True

    @pytest.mark.parametrize("name", ["node", "ug-big-data", "SIG-node", "sig_node", ""])
    def test_invalid(self, name: str) -> None:
        assert validate_group_name(name) is False


class TestOwnersLocation:
    """Test suite for OWNERS URL parsing."""

    def test_parse_raw_url_in_subdirectory(self) -> None:
        location = OwnersLocation.parse(
            "https://raw.githubusercontent.com/kubernetes/kubernetes/master/pkg/kubelet/OWNERS"
        )

        assert location is not None
        assert location.org == "kubernetes"
        assert location.repo == "kubernetes"
        assert location.branch == "master"
        assert location.path == "pkg/kubelet/OWNERS"
        assert location.root_dir == "pkg/kubelet"
        assert location.slug == "kubernetes/kubernetes"
        assert location.checkout_dir == "kubernetes-org-kubernetes"

    def test_parse_repo_root_owners(self) -> None:
        location = OwnersLocation.parse(
            "https://raw.githubusercontent.com/kubernetes-sigs/kueue/main/OWNERS"
        )

        assert location.root_dir == "."
        assert location.checkout_dir == "kubernetes-sigs-org-kueue"

    def test_parse_blob_url(self) -> None:
        location = OwnersLocation.parse(
            "https://github.com/kubernetes/test-infra/blob/master/prow/OWNERS"
        )

        assert location.slug == "kubernetes/test-infra"
        assert location.root_dir == "prow"

    def test_clone_urls(self) -> None:
        location = OwnersLocation.for_repo("kubernetes/kubernetes")

        assert location.clone_url() == "git@github.com:kubernetes/kubernetes.git"
        assert location.clone_url(use_https=True) == "https://github.com/kubernetes/kubernetes.git"

    def test_parse_rejects_other_urls(self) -> None:
        assert OwnersLocation.parse("https://gitlab.com/a/b/-/raw/main/OWNERS") is None

    def test_owners_locations_skips_unparseable(self) -> None:
        locations = owners_locations(
            [
                "not a url",
                "https://raw.githubusercontent.com/kubernetes/kubectl/master/OWNERS",
            ]
        )

        assert [loc.slug for loc in locations] == ["kubernetes/kubectl"]
