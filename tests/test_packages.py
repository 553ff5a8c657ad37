from bsfkit.packages import (
    Package,
    sort_packages,
    sort_packages_with_timestamp,
    sort_packages_with_version,
)


def pkg(name, version, epoch):
    return Package(
        name=name,
        version=version,
        spdx_id="MIT",
        free=True,
        homepage="https://test.com",
        epoch_seconds=epoch,
    )


def versions(packages):
    return [p.version for p in packages]


def test_semver_compliant_packages():
    pkgs = [
        pkg("semver", "1.0.0", 1),
        pkg("semver", "2.0.0", 2),
        pkg("semver", "1.5.6", 2),
        pkg("semver", "0.3.0", 2),
        pkg("semver", "11.6.0", 2),
        pkg("semver", "2.11.6", 2),
        pkg("semver", "2.6.9", 2),
    ]
    assert versions(sort_packages(pkgs)) == [
        "11.6.0",
        "2.11.6",
        "2.6.9",
        "2.0.0",
        "1.5.6",
        "1.0.0",
        "0.3.0",
    ]


def test_semver_and_non_semver_packages():
    pkgs = [
        pkg("non-semver", "234ca.b243.cc32c", 1),
        pkg("non-semver", "3213.122a2.1212", 2),
        pkg("semver", "1.5.22", 1),
        pkg("semver", "2.6.11", 1),
        pkg("non-semver", "213f.4353.75v4", 5),
        pkg("non-semver", "313f.4353.75v4", 4),
        pkg("semver", "4.74.0", 1),
    ]
    assert versions(sort_packages(pkgs)) == [
        "4.74.0",
        "2.6.11",
        "1.5.22",
        "213f.4353.75v4",
        "313f.4353.75v4",
        "3213.122a2.1212",
        "234ca.b243.cc32c",
    ]


def test_sort_by_timestamp_only():
    pkgs = [
        pkg("non-semver", "32fd.12a12.1212", 10),
        pkg("non-semver", "4fd2.1212.1212", 4),
        pkg("non-semver", "5fd2.1212.1212", 2),
        pkg("non-semver", "232e.5v33.743", 7),
        pkg("non-semver", "23r.2324.0", 6),
        pkg("non-semver", "6343.4r32.1212", 3),
        pkg("non-semver", "21d2.1212.1212", 12),
    ]
    expected = [
        "21d2.1212.1212",
        "32fd.12a12.1212",
        "232e.5v33.743",
        "23r.2324.0",
        "4fd2.1212.1212",
        "6343.4r32.1212",
        "5fd2.1212.1212",
    ]
    assert versions(sort_packages(pkgs)) == expected
    assert versions(sort_packages_with_timestamp(pkgs)) == expected


def test_sort_with_version_keeps_versions_unchanged():
    pkgs = [pkg("a", "1.0.0", 1), pkg("a", "3.0.0", 1), pkg("a", "2.0.0", 1)]
    result = sort_packages_with_version(pkgs)
    assert versions(result) == ["3.0.0", "2.0.0", "1.0.0"]
    assert versions(pkgs) == ["1.0.0", "3.0.0", "2.0.0"]


def test_sort_packages_preserves_all_items():
    pkgs = [pkg("a", "1.0.0", 3), pkg("b", "x.y", 9), pkg("c", "0.1.0", 1)]
    result = sort_packages(pkgs)
    assert sorted(p.name for p in result) == ["a", "b", "c"]
    assert result[-1].name == "b"