"""
The single HTML page. It only renders snapshots and posts events; all game
and session state stays on the server.
"""

from . import config

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>__TITLE__</title>
<style>
  body { margin: 0; min-height: 100vh; background: #0a0a1a; color: #e6edf3;
         font-family: system-ui, sans-serif; overflow-x: hidden; }
  .page { display: none; text-align: center; padding: 2rem; position: relative; z-index: 1; }
  .page.active { display: block; }
  h1 { color: #00ffff; text-shadow: 0 0 12px #00ffff; }
  button { background: transparent; color: #ff00ff; border: 2px solid #ff00ff; border-radius: 8px;
           padding: .6rem 1.2rem; margin: .3rem; cursor: pointer; font-size: 1rem; }
  .game-board { display: grid; grid-template-columns: repeat(3, 90px); gap: 8px;
                justify-content: center; margin: 1.5rem auto; transition: transform .2s; }
  .cell { width: 90px; height: 90px; border: 2px solid #2a2e39; border-radius: 10px;
          font-size: 3rem; display: flex; align-items: center; justify-content: center; cursor: pointer; }
  .cell-x { color: #00ffff; text-shadow: 0 0 10px #00ffff; }
  .cell-o { color: #ff00ff; text-shadow: 0 0 10px #ff00ff; }
  .winning-cell { background: rgba(255, 215, 0, .2); border-color: #ffd700; }
  .avatar { width: 80px; height: 80px; border-radius: 50%; margin: 0 auto; font-size: 2.5rem;
            line-height: 80px; border: 2px solid #00ffff; }
  .stats span { display: inline-block; margin: .5rem 1rem; }
  .modal { display: none; position: fixed; inset: 0; background: rgba(0, 0, 0, .7); z-index: 5;
           align-items: center; justify-content: center; }
  .modal.active { display: flex; }
  .modal-box { background: #111318; border: 2px solid #00ffff; border-radius: 12px; padding: 1.5rem; min-width: 260px; }
  .floating-particles { position: fixed; inset: 0; pointer-events: none; z-index: 0; }
  @keyframes float { from { transform: translateY(100vh); } to { transform: translateY(-10vh); } }
</style>
</head>
<body>
<div class="floating-particles"></div>

<section id="homePage" class="page">
  <h1>__TITLE__</h1>
  <button onclick="showPage('loginPage')">Play</button>
</section>

<section id="loginPage" class="page">
  <h1>Login</h1>
  <button onclick="handleLogin('google')">Continue with Google</button>
  <button onclick="handleLogin('guest')">Play as Guest</button>
  <div><button onclick="showPage('homePage')">Back</button></div>
</section>

<section id="gamePage" class="page">
  <h1>__TITLE__</h1>
  <div>Current player: <strong id="currentPlayerDisplay">X</strong></div>
  <div id="gameStatus">Game in Progress</div>
  <div id="gameBoard" class="game-board"></div>
  <button onclick="restartGame()">Restart</button>
  <button onclick="showPage('profilePage')">Profile</button>
</section>

<section id="profilePage" class="page">
  <div id="profileAvatar" class="avatar"></div>
  <h2 id="profileName"></h2>
  <div class="stats">
    <span>Played <b id="matchesPlayed">0</b></span>
    <span>Won <b id="matchesWon">0</b></span>
    <span>Lost <b id="matchesLost">0</b></span>
    <span>Win rate <b id="winPercentage">0%</b></span>
  </div>
  <button onclick="showPage('gamePage')">Play</button>
  <button onclick="handleLogout()">Logout</button>
</section>

<div id="messageModal" class="modal">
  <div class="modal-box">
    <h3 id="modalTitle"></h3>
    <p id="modalMessage"></p>
    <button onclick="closeModal()">OK</button>
  </div>
</div>

<script>
const NEON = ["#00ffff", "#ff00ff", "#00ff00", "#ffff00", "#ff0066"];
const board = document.getElementById("gameBoard");
for (let i = 0; i < 9; i++) {
  const cell = document.createElement("div");
  cell.className = "cell";
  cell.addEventListener("click", () => send("/move", {index: i}));
  board.appendChild(cell);
}

async function send(path, body) {
  const resp = await fetch(path, {
    method: "POST",
    headers: {"Content-Type": "application/json"},
    body: body ? JSON.stringify(body) : null,
  });
  if (!resp.ok) return null;
  const outcome = await resp.json();
  render(outcome.snapshot);
  if (outcome.notice) showModal(outcome.notice.title, outcome.notice.message);
  return outcome;
}

function render(snap) {
  const g = snap.game;
  board.querySelectorAll(".cell").forEach((cell, i) => {
    cell.textContent = g.board[i];
    cell.className = "cell" + (g.board[i] ? (g.board[i] === "X" ? " cell-x" : " cell-o") : "")
      + (g.winning_line && g.winning_line.includes(i) ? " winning-cell" : "");
  });
  const cur = document.getElementById("currentPlayerDisplay");
  cur.textContent = g.current;
  cur.style.color = g.current === "X" ? "#00ffff" : "#ff00ff";
  const status = document.getElementById("gameStatus");
  status.textContent = g.status_text;
  status.style.color = g.status === "draw" ? "#ffd700" : (g.winner === "X" ? "#00ffff" : "#ff00ff");

  const p = snap.profile;
  document.getElementById("profileName").textContent = p.name;
  document.getElementById("profileAvatar").textContent = p.avatar;
  document.getElementById("matchesPlayed").textContent = p.matches_played;
  document.getElementById("matchesWon").textContent = p.matches_won;
  document.getElementById("matchesLost").textContent = p.matches_lost;
  document.getElementById("winPercentage").textContent = p.win_percentage + "%";
}

function showPage(pageId) {
  document.querySelectorAll(".page").forEach(p => p.classList.remove("active"));
  const target = document.getElementById(pageId);
  if (target) setTimeout(() => target.classList.add("active"), 50);
}

async function handleLogin(mode) {
  if (mode === "google") {
    showModal("Google Login", "Simulating Google login...");
    await new Promise(r => setTimeout(r, 1000));
  }
  const name = prompt(mode === "google" ? "Enter your name for the game:" : "Enter your name to play as guest:");
  const outcome = await send("/login/" + mode, {name: name});
  if (outcome && outcome.accepted) showPage("profilePage");
}

async function handleLogout() {
  if (!confirm("Are you sure you want to logout? Your stats will be saved.")) return;
  await send("/logout");
  showPage("homePage");
}

function restartGame() {
  if (confirm("Are you sure you want to restart the current game?")) send("/restart");
}

function showModal(title, message) {
  document.getElementById("modalTitle").textContent = title;
  document.getElementById("modalMessage").textContent = message;
  document.getElementById("messageModal").classList.add("active");
}

function closeModal() {
  document.getElementById("messageModal").classList.remove("active");
}

document.getElementById("messageModal").addEventListener("click", e => {
  if (e.target.id === "messageModal") closeModal();
});
document.addEventListener("keydown", e => { if (e.key === "Escape") closeModal(); });

function createFloatingParticles() {
  const container = document.querySelector(".floating-particles");
  for (let i = 0; i < 20; i++) {
    const particle = document.createElement("div");
    const color = NEON[Math.floor(Math.random() * NEON.length)];
    particle.style.cssText = `position: absolute; border-radius: 50%;
      width: ${Math.random() * 3 + 1}px; height: ${Math.random() * 3 + 1}px;
      background: ${color}; color: ${color}; left: ${Math.random() * 100}%;
      animation: float ${Math.random() * 10 + 10}s linear infinite;
      animation-delay: ${Math.random() * 5}s;
      box-shadow: 0 0 ${Math.random() * 10 + 5}px currentColor;`;
    container.appendChild(particle);
  }
}

window.addEventListener("resize", () => {
  board.style.transform = window.innerWidth <= 480 ? "scale(0.9)" : "scale(1)";
});

(async () => {
  const snap = await (await fetch("/state")).json();
  render(snap);
  showPage(snap.page + "Page");
  createFloatingParticles();
})();
</script>
</body>
</html>
"""


# PUBLIC_INTERFACE
def render_page(title: str = config.APP_TITLE) -> str:
    return PAGE_TEMPLATE.replace("__TITLE__", title)
