"""
Test Configuration and Fixtures
=============================

This module provides pytest fixtures and utilities for testing pbxsync.
"""

from collections.abc import Callable
from pathlib import Path
from textwrap import dedent

import pytest
from loguru import logger

from fakes import FakeProject
from pbxsync.config import SyncConfig

PBXPROJ_TEMPLATE = dedent("""\
    // !$*UTF8*$!
    {
    	archiveVersion = 1;
    	classes = {
    	};
    	objectVersion = 56;
    	objects = {

    /* Begin PBXBuildFile section */
    		A10000000000000000000001 /* existing.cpp in Sources */ = {isa = PBXBuildFile; fileRef = A10000000000000000000002 /* existing.cpp */; };
    /* End PBXBuildFile section */

    /* Begin PBXFileReference section */
    		A10000000000000000000002 /* existing.cpp */ = {isa = PBXFileReference; lastKnownFileType = sourcecode.cpp.cpp; path = existing.cpp; sourceTree = "<group>"; };
    		A10000000000000000000003 /* App.app */ = {isa = PBXFileReference; explicitFileType = wrapper.application; includeInIndex = 0; path = App.app; sourceTree = BUILT_PRODUCTS_DIR; };
    /* End PBXFileReference section */

    /* Begin PBXGroup section */
    		A10000000000000000000004 = {
    			isa = PBXGroup;
    			children = (
    				A10000000000000000000005 /* src */,
    				A10000000000000000000006 /* Products */,
    			);
    			sourceTree = "<group>";
    		};
    		A10000000000000000000005 /* src */ = {
    			isa = PBXGroup;
    			children = (
    				A10000000000000000000002 /* existing.cpp */,
    			);
    			path = src;
    			sourceTree = "<group>";
    		};
    		A10000000000000000000006 /* Products */ = {
    			isa = PBXGroup;
    			children = (
    				A10000000000000000000003 /* App.app */,
    			);
    			name = Products;
    			sourceTree = "<group>";
    		};
    /* End PBXGroup section */

    /* Begin PBXNativeTarget section */
    		A10000000000000000000007 /* App */ = {
    			isa = PBXNativeTarget;
    			buildConfigurationList = A1000000000000000000000B /* Build configuration list for PBXNativeTarget "App" */;
    			buildPhases = (
    				A10000000000000000000008 /* Sources */,
    			);
    			buildRules = (
    			);
    			dependencies = (
    			);
    			name = App;
    			productName = App;
    			productReference = A10000000000000000000003 /* App.app */;
    			productType = "com.apple.product-type.application";
    		};
    /* End PBXNativeTarget section */

    /* Begin PBXProject section */
    		A10000000000000000000009 /* Project object */ = {
    			isa = PBXProject;
    			buildConfigurationList = A1000000000000000000000C /* Build configuration list for PBXProject "App" */;
    			compatibilityVersion = "Xcode 14.0";
    			developmentRegion = en;
    			hasScannedForEncodings = 0;
    			mainGroup = A10000000000000000000004;
    			productRefGroup = A10000000000000000000006 /* Products */;
    			projectDirPath = "";
    			projectRoot = "";
    			targets = (
    				A10000000000000000000007 /* App */,
    			);
    		};
    /* End PBXProject section */

    /* Begin PBXSourcesBuildPhase section */
    		A10000000000000000000008 /* Sources */ = {
    			isa = PBXSourcesBuildPhase;
    			buildActionMask = 2147483647;
    			files = (
    				A10000000000000000000001 /* existing.cpp in Sources */,
    			);
    			runOnlyForDeploymentPostprocessing = 0;
    		};
    /* End PBXSourcesBuildPhase section */

    /* Begin XCBuildConfiguration section */
    		A1000000000000000000000D /* Debug */ = {
    			isa = XCBuildConfiguration;
    			buildSettings = {
    				PRODUCT_NAME = "$(TARGET_NAME)";
    			};
    			name = Debug;
    		};
    		A1000000000000000000000E /* Debug */ = {
    			isa = XCBuildConfiguration;
    			buildSettings = {
    				SDKROOT = iphoneos;
    			};
    			name = Debug;
    		};
    /* End XCBuildConfiguration section */

    /* Begin XCConfigurationList section */
    		A1000000000000000000000B /* Build configuration list for PBXNativeTarget "App" */ = {
    			isa = XCConfigurationList;
    			buildConfigurations = (
    				A1000000000000000000000D /* Debug */,
    			);
    			defaultConfigurationIsVisible = 0;
    			defaultConfigurationName = Debug;
    		};
    		A1000000000000000000000C /* Build configuration list for PBXProject "App" */ = {
    			isa = XCConfigurationList;
    			buildConfigurations = (
    				A1000000000000000000000E /* Debug */,
    			);
    			defaultConfigurationIsVisible = 0;
    			defaultConfigurationName = Debug;
    		};
    /* End XCConfigurationList section */
    	};
    	rootObject = A10000000000000000000009 /* Project object */;
    }
    """)

SOURCE_FILES = [
    "src/existing.cpp",
    "src/engine/scene/Scene.cpp",
    "src/engine/scene/Scene.h",
    "src/platform/Bridge.mm",
    "src/imgui/widget.cpp",
    "src/main.cpp",
    "src/README.md",
]


@pytest.fixture(autouse=True)
def silence_logger():
    """Keep loguru output out of test runs."""
    logger.remove()
    yield


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """
    Create a project directory holding an Xcode project and a source tree.

    Returns:
        Path: The project's base directory (parent of ``App.xcodeproj``)
    """
    root = tmp_path / "App"
    bundle = root / "App.xcodeproj"
    bundle.mkdir(parents=True)
    (bundle / "project.pbxproj").write_text(PBXPROJ_TEMPLATE)

    for relative in SOURCE_FILES:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"// {relative}\n")
    return root


@pytest.fixture
def sync_config(project_root: Path) -> SyncConfig:
    """Configuration scanning ``src`` of the fixture project."""
    return SyncConfig(
        project_path=project_root / "App.xcodeproj",
        source_roots=[project_root / "src"],
        exclude_patterns=["imgui", "main.cpp"],
    )


@pytest.fixture
def fake_project(project_root: Path) -> FakeProject:
    """An empty in-memory project rooted at the fixture directory."""
    return FakeProject(project_root)


@pytest.fixture
def fake_loader(fake_project: FakeProject) -> Callable[[Path], FakeProject]:
    """Loader that always hands back ``fake_project``, as if reloaded after a save."""
    loaded: list[Path] = []

    def load(path: Path) -> FakeProject:
        loaded.append(Path(path))
        return fake_project

    load.loaded = loaded
    return load


@pytest.fixture
def legacy_layout(tmp_path: Path) -> Path:
    """
    Recreate the layout the built-in defaults expect.

    The project sits two levels below the checkout root, next to the shared
    and iOS source trees and the ``scripts`` directory the tool runs from.

    Returns:
        Path: The checkout root
    """
    bundle = tmp_path / "prebuilt_ios" / "PredatorsIOS" / "PredatorsIOS.xcodeproj"
    bundle.mkdir(parents=True)
    (bundle / "project.pbxproj").write_text(PBXPROJ_TEMPLATE)
    (tmp_path / "scripts").mkdir()

    for relative in [
        "source_common/engine/Scene.cpp",
        "source_common/engine/Scene.h",
        "source_common/imgui/imgui.cpp",
        "source_ios/Bridge.mm",
        "source_ios/main.cpp",
    ]:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"// {relative}\n")
    return tmp_path
