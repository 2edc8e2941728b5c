"""Built-in MVI SwiftUI view template and the expander that fills it in.

Part of the ``stencil_cli`` package (PyPI: stencil-cli).
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from stencil_cli.tokens import resolve_token

# Placeholders look like ___NAME___; NAME may carry a ``:modifier``.
PLACEHOLDER_RE = re.compile(r"___([A-Za-z][A-Za-z0-9_:]*?)___")

FILE_NAME_SKELETON = "___FILEBASENAME___View.swift"

SKELETON = """\
//___FILEHEADER___

import Foundation
import SwiftUI

// MARK: ___FILEBASENAMEASIDENTIFIER___

struct ___FILEBASENAMEASIDENTIFIER___: IntentBindingType {
    @StateObject var container: Container<___VARIABLE_productName:identifier___IntentType, ___VARIABLE_productName:identifier___Model.State>
    var intent: ___VARIABLE_productName:identifier___IntentType { self.container.intent }
    var state: ___VARIABLE_productName:identifier___Model.State { self.intent.state }
}

// MARK: Body

extension ___FILEBASENAMEASIDENTIFIER___: ViewControllable {
    
    var body: some View {
        VStack {
            
        }
    }
}

// MARK: Build

extension ___FILEBASENAMEASIDENTIFIER___ {
    static func build(intent: ___VARIABLE_productName:identifier___Intent) -> UIViewController {
        return ___FILEBASENAMEASIDENTIFIER___(
            container: .init(
                intent: intent as ___VARIABLE_productName:identifier___IntentType,
                state: intent.state,
                modelChangePublisher: intent.objectWillChange
            )
        )
        .viewController
    }
}
"""


def find_tokens(skeleton: str) -> list[str]:
    """Return the distinct placeholder names in *skeleton*, first-seen order."""
    return list(dict.fromkeys(PLACEHOLDER_RE.findall(skeleton)))


def expand(skeleton: str, tokens: Mapping[str, str]) -> str:
    """Return *skeleton* with every placeholder replaced.

    Every placeholder is resolved before any text is produced, so a
    ``MissingTokenError`` or ``EmptyIdentifierError`` leaves nothing
    half-written.  Substituted values are not scanned again.
    """
    values = {name: resolve_token(name, tokens) for name in find_tokens(skeleton)}
    return PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], skeleton)


def output_file_name(name: str, skeleton: str = FILE_NAME_SKELETON) -> str:
    """Return the file name created for the user-entered *name*.

    >>> output_file_name("Profile")
    'ProfileView.swift'
    """
    return expand(skeleton, {"FILEBASENAME": name})
