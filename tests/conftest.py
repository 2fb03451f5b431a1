"""Shared fixtures: small client/server source trees."""

from pathlib import Path

import pytest

QUICK_COMPLAINT_FORM = """import { useTranslation } from 'react-i18next';

export function QuickComplaintForm() {
  const { t } = useTranslation();
  return (
    <form className="complaint-form">
      <button type="submit">Submit</button>
      <input placeholder="Enter code" />
      <span>{t('common.cancel')}</span>
    </form>
  );
}
"""

BROKEN_COMPONENT = "export const = <div>;\n"

EMPTY_COMPONENT = "export const Empty = () => null;\n"

AUTH_CONTROLLER = """const login = async (req, res) => {
  if (!user) {
    return res.status(401).json({ message: 'Invalid email or password' });
  }
};
"""


def write(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path):
    """A project with one UI component, one unparseable file, one clean file and one controller."""
    write(tmp_path, "client/src/components/QuickComplaintForm.tsx", QUICK_COMPLAINT_FORM)
    write(tmp_path, "client/src/pages/Broken.tsx", BROKEN_COMPONENT)
    write(tmp_path, "client/src/pages/Empty.tsx", EMPTY_COMPONENT)
    write(tmp_path, "client/node_modules/lib/index.js", "export const x = <p>Ignored text</p>;\n")
    write(tmp_path, "client/src/pages/Empty.test.tsx", "const s = <p>Test only</p>;\n")
    write(tmp_path, "server/controllers/authController.js", AUTH_CONTROLLER)
    return tmp_path
