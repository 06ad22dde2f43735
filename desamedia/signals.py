from blinker import Namespace

_signals = Namespace()

# dikirim setiap kali identitas user berubah: login (profile=AuthorProfile)
# atau logout (profile=None)
identity_changed = _signals.signal("identity-changed")
