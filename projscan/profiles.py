from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .model import BlockStyle, ConditionStyle, LanguageProfile, StringDelimiter


FILESYSTEM = "filesystem"
NETWORK = "network"
GLOBAL_STATE = "global_state"
CLOCK = "clock"
RANDOM = "random"

IMPURE_CATEGORIES = (FILESYSTEM, NETWORK, GLOBAL_STATE, CLOCK, RANDOM)

COMMON_VALUES = frozenset(float(v) for v in (-1, 0, 1, 2, 4, 8, 16, 32, 64, 128, 256, 512, 1024))

_DOUBLE = StringDelimiter(open='"', close='"')
_SINGLE = StringDelimiter(open="'", close="'")
_BACKTICK = StringDelimiter(open="`", close="`")

_C_COMMENTS = dict(line_comments=("//",), block_comments=(("/*", "*/"),))


GENERIC = LanguageProfile(
	name="generic",
	line_comments=("//", "#"),
	block_comments=(("/*", "*/"),),
	string_delimiters=(_DOUBLE, _SINGLE),
	conditional_keywords=frozenset({"if", "elif", "elsif", "unless"}),
	loop_keywords=frozenset({"for", "foreach", "while", "until", "loop"}),
	switch_keywords=frozenset({"switch"}),
	logical_and=frozenset({"&&", "and"}),
	logical_or=frozenset({"||", "or"}),
	continuation_keywords=frozenset({"else"}),
	common_values=COMMON_VALUES,
	impure_symbols={
		FILESYSTEM: ("open(", "fopen", ".read(", ".write(", "readFile", "fs.", "fs::"),
		NETWORK: ("socket", "fetch(", "http_client", "requests."),
		GLOBAL_STATE: ("GLOBAL_", "getenv", "environ"),
		CLOCK: ("now()", "time(", "SystemTime::"),
		RANDOM: ("random", "rand(", "rand::"),
	},
	condition_style=ConditionStyle.AUTO,
	ternary=True,
)

RUST = LanguageProfile(
	name="rust",
	string_delimiters=(
		StringDelimiter(open='r#"', close='"#', escape=None),
		_DOUBLE,
	),
	conditional_keywords=frozenset({"if"}),
	loop_keywords=frozenset({"for", "while", "loop"}),
	switch_keywords=frozenset({"match"}),
	logical_and=frozenset({"&&"}),
	logical_or=frozenset({"||"}),
	continuation_keywords=frozenset({"else"}),
	common_values=COMMON_VALUES,
	impure_symbols={
		FILESYSTEM: ("fs::", "File::", "Path::", "OpenOptions", ".read(", ".write(", ".read_to_string(", "read_dir"),
		NETWORK: ("http_client", "socket", "TcpStream", "UdpSocket", "reqwest::", "hyper::"),
		GLOBAL_STATE: ("GLOBAL_", "env::var", "environment_var", "lazy_static", "thread_local"),
		CLOCK: ("SystemTime::", "Instant::", "Utc::now", "Local::now"),
		RANDOM: ("rand::", "thread_rng", ".gen_bool", ".gen_range", ".gen::"),
	},
	condition_style=ConditionStyle.SPAN,
	char_literals=True,
	**_C_COMMENTS,
)

PYTHON = LanguageProfile(
	name="python",
	line_comments=("#",),
	string_delimiters=(
		StringDelimiter(open='"""', close='"""'),
		StringDelimiter(open="'''", close="'''"),
		_DOUBLE,
		_SINGLE,
	),
	conditional_keywords=frozenset({"if", "elif"}),
	loop_keywords=frozenset({"for", "while"}),
	switch_keywords=frozenset({"match"}),
	logical_and=frozenset({"and"}),
	logical_or=frozenset({"or"}),
	continuation_keywords=frozenset({"else"}),
	common_values=COMMON_VALUES,
	impure_symbols={
		FILESYSTEM: ("open(", "os.path.", "pathlib", "Path(", ".read(", ".write(", ".read_text(", "os.listdir", "os.stat", "shutil."),
		NETWORK: ("requests.", "urllib", "httpx.", "socket", "http.client", "aiohttp", "urlopen("),
		GLOBAL_STATE: ("os.environ", "os.getenv", "GLOBAL_", "sys.argv", "globals()"),
		CLOCK: ("time.time", "time.monotonic", "perf_counter", "datetime.now", "datetime.utcnow", "date.today"),
		RANDOM: ("random.", "randint", "uuid4", "secrets."),
	},
	block_style=BlockStyle.INDENT,
	condition_style=ConditionStyle.SPAN,
)

JAVASCRIPT = LanguageProfile(
	name="javascript",
	string_delimiters=(_DOUBLE, _SINGLE, _BACKTICK),
	conditional_keywords=frozenset({"if"}),
	loop_keywords=frozenset({"for", "while", "do"}),
	switch_keywords=frozenset({"switch"}),
	logical_and=frozenset({"&&"}),
	logical_or=frozenset({"||"}),
	continuation_keywords=frozenset({"else"}),
	common_values=COMMON_VALUES,
	impure_symbols={
		FILESYSTEM: ("fs.", "readFileSync", "existsSync", "readFile(", ".read(", ".write("),
		NETWORK: ("fetch(", "axios", "XMLHttpRequest", "http.", "https.", "WebSocket", "socket"),
		GLOBAL_STATE: ("window.", "globalThis", "process.env", "localStorage", "sessionStorage", "document.", "GLOBAL_"),
		CLOCK: ("Date.now", "new Date(", "performance.now"),
		RANDOM: ("Math.random", "getRandomValues", "randomUUID"),
	},
	ternary=True,
	regex_literals=True,
	**_C_COMMENTS,
)

JAVA = LanguageProfile(
	name="java",
	string_delimiters=(StringDelimiter(open='"""', close='"""'), _DOUBLE, _SINGLE),
	conditional_keywords=frozenset({"if"}),
	loop_keywords=frozenset({"for", "while", "do"}),
	switch_keywords=frozenset({"switch"}),
	logical_and=frozenset({"&&"}),
	logical_or=frozenset({"||"}),
	continuation_keywords=frozenset({"else"}),
	common_values=COMMON_VALUES,
	impure_symbols={
		FILESYSTEM: ("Files.", "new File(", "FileReader", "FileInputStream", ".read(", ".write("),
		NETWORK: ("HttpClient", "Socket", "URLConnection", "new URL(", "RestTemplate"),
		GLOBAL_STATE: ("System.getenv", "System.getProperty", "GLOBAL_"),
		CLOCK: ("System.currentTimeMillis", "System.nanoTime", "LocalDate.now", "LocalDateTime.now", "Instant.now"),
		RANDOM: ("Math.random", "new Random", "ThreadLocalRandom", "UUID.randomUUID", "SecureRandom"),
	},
	ternary=True,
	**_C_COMMENTS,
)

GO = LanguageProfile(
	name="go",
	string_delimiters=(_DOUBLE, _SINGLE, StringDelimiter(open="`", close="`", escape=None)),
	conditional_keywords=frozenset({"if"}),
	loop_keywords=frozenset({"for"}),
	switch_keywords=frozenset({"switch", "select"}),
	logical_and=frozenset({"&&"}),
	logical_or=frozenset({"||"}),
	continuation_keywords=frozenset({"else"}),
	common_values=COMMON_VALUES,
	impure_symbols={
		FILESYSTEM: ("os.Open", "os.ReadFile", "os.Stat", "os.Create", "ioutil.", ".Read(", ".Write(", ".read("),
		NETWORK: ("http.", "net.", "grpc."),
		GLOBAL_STATE: ("os.Getenv", "os.Args", "GLOBAL_"),
		CLOCK: ("time.Now", "time.Since", "time.Until"),
		RANDOM: ("rand.", "uuid.New"),
	},
	condition_style=ConditionStyle.SPAN,
	**_C_COMMENTS,
)

C = LanguageProfile(
	name="c",
	string_delimiters=(_DOUBLE, _SINGLE),
	conditional_keywords=frozenset({"if"}),
	loop_keywords=frozenset({"for", "while", "do"}),
	switch_keywords=frozenset({"switch"}),
	logical_and=frozenset({"&&"}),
	logical_or=frozenset({"||"}),
	continuation_keywords=frozenset({"else"}),
	common_values=COMMON_VALUES,
	impure_symbols={
		FILESYSTEM: ("fopen", "fread", "fwrite", "fgets", "fscanf", "std::filesystem", "std::ifstream", "std::ofstream", "access(", "stat(", ".read(", ".write("),
		NETWORK: ("socket", "connect(", "recv(", "send(", "curl_"),
		GLOBAL_STATE: ("getenv", "errno", "GLOBAL_"),
		CLOCK: ("time(", "clock(", "gettimeofday", "system_clock", "steady_clock"),
		RANDOM: ("rand(", "srand", "random(", "std::random_device", "std::mt19937"),
	},
	ternary=True,
	**_C_COMMENTS,
)

BUILTIN_PROFILES = (GENERIC, RUST, PYTHON, JAVASCRIPT, JAVA, GO, C)

LANGUAGE_ALIASES: Dict[str, str] = {
	"typescript": "javascript",
	"ts": "javascript",
	"js": "javascript",
	"jsx": "javascript",
	"tsx": "javascript",
	"py": "python",
	"rs": "rust",
	"golang": "go",
	"cpp": "c",
	"c++": "c",
	"cxx": "c",
	"cc": "c",
	"h": "c",
	"hpp": "c",
	"csharp": "java",
	"kotlin": "java",
}


class ProfileRegistry:
	"""Maps language hints onto the built-in lexical profiles.

	Build one per process (or per request) and hand it to the scanner and the
	analyzer; lookups never fail, unknown hints resolve to the generic profile.
	"""

	def __init__(
		self,
		profiles: Optional[Iterable[LanguageProfile]] = None,
		aliases: Optional[Dict[str, str]] = None,
	):
		self._profiles: Dict[str, LanguageProfile] = {}
		for profile in profiles if profiles is not None else BUILTIN_PROFILES:
			self._profiles[profile.name] = profile
		self._aliases = dict(LANGUAGE_ALIASES if aliases is None else aliases)
		self.default = self._profiles.get(GENERIC.name, GENERIC)

	def get(self, language: Optional[str]) -> LanguageProfile:
		if not language:
			return self.default
		key = language.strip().lower()
		key = self._aliases.get(key, key)
		return self._profiles.get(key, self.default)

	def names(self) -> List[str]:
		return sorted(self._profiles)

	def __contains__(self, language: str) -> bool:
		key = language.strip().lower()
		return self._aliases.get(key, key) in self._profiles
