# CSS/HTML/JS templates for the static results report
# Placeholders are %NAME% tokens filled in by report.generate_html

REPORT_CSS = r"""
*{margin:0;padding:0;box-sizing:border-box}
body{font-family:'Segoe UI',Tahoma,Geneva,Verdana,sans-serif;background:linear-gradient(135deg,#f5f7fa 0%,#c3cfe2 100%);line-height:1.6}
.container{max-width:100%;margin:0 auto;background:#fff;border-radius:15px;box-shadow:0 10px 40px rgba(0,0,0,.1);overflow:hidden}
.header{background:linear-gradient(135deg,#006a4e 0%,#00563f 100%);color:#fff;padding:20px;margin-bottom:10px}
.header h1{font-size:2.4em;margin:0;text-shadow:2px 2px 4px rgba(0,0,0,.3);line-height:1.2}
.bangla-title{font-size:1.8em;text-align:center;font-weight:600;letter-spacing:1px;margin-top:10px}
.content{padding:20px}
.summary,.simulation-section{background:#f8f9fa;border-left:5px solid #006a4e;border-radius:10px;padding:20px;margin-bottom:20px}
.summary h2,.simulation-section h2{color:#006a4e;display:flex;align-items:center;gap:10px;margin-bottom:10px}
.simulation-intro{color:#555;margin-bottom:15px}
.simulation-controls{display:flex;flex-wrap:wrap;align-items:center;gap:20px}
.percentage-input-group{display:flex;align-items:center;gap:5px}
.percentage-input{width:80px;padding:8px;font-size:1.1em;text-align:center;border:2px solid #006a4e;border-radius:8px}
.btn-adjust,.btn-submit,.btn-reset,.btn-print{padding:8px 16px;border:none;border-radius:8px;cursor:pointer;font-weight:600}
.btn-adjust{background:#e9ecef;font-size:1.2em}
.btn-submit{background:#006a4e;color:#fff}
.btn-reset{background:#6c757d;color:#fff}
.btn-print{background:#0d6efd;color:#fff}
.simulation-info-box{display:none;align-items:flex-start;gap:10px;background:#fff3cd;border:1px solid #ffc107;border-radius:8px;padding:12px;width:100%}
.simulation-info-box.show{display:flex}
.stats-grid{display:grid;grid-template-columns:repeat(auto-fit,minmax(260px,1fr));gap:20px;margin-bottom:20px}
.stat-card{border-radius:12px;padding:20px;color:#fff;box-shadow:0 5px 15px rgba(0,0,0,.1);transition:transform .3s}
.stat-card.bnp{background:linear-gradient(135deg,#1a5f2a 0%,#2e8b57 100%)}
.stat-card.alliance{background:linear-gradient(135deg,#8b1a1a 0%,#c0392b 100%)}
.stat-card.winner-highlight{transform:scale(1.03);box-shadow:0 0 0 4px #ffd700,0 10px 25px rgba(0,0,0,.2)}
.stat-card.loser-highlight{opacity:.75}
.stat-number{font-size:3em;font-weight:700}
.stat-label{font-size:1.1em;opacity:.9}
.stat-votes{margin-top:8px;font-size:1em}
.party-header-block{color:#006a4e;display:flex;align-items:center;gap:10px;margin-bottom:15px}
.filter-search{display:flex;flex-wrap:wrap;gap:10px;margin-bottom:15px}
.filter-search input{flex:1;min-width:250px;padding:10px;border:2px solid #dee2e6;border-radius:8px}
.filter-search select{padding:10px;border:2px solid #dee2e6;border-radius:8px}
.table-container{overflow-x:auto;border-radius:10px;border:1px solid #dee2e6}
table{width:100%;border-collapse:collapse}
th{background:#006a4e;color:#fff;padding:12px;text-align:left;position:sticky;top:0}
td{padding:10px 12px;border-bottom:1px solid #eee}
tbody tr:hover{background:#f1f8f5}
.winner-row{background:#fcfff5}
.candidate-name-block{padding:6px 10px;border-radius:8px}
.candidate-name-block h4{font-size:1em;margin:0}
.candidate-name-block.winner-highlighted{background:#d4edda;border:2px solid #28a745}
.party-label{font-size:.8em;color:#666}
.winner-highlighted .party-label{color:#155724;font-weight:600}
.votes{font-variant-numeric:tabular-nums;text-align:right;font-weight:600}
.vote-difference{font-weight:600;text-align:right}
.vote-difference.positive{color:#1a5f2a}
.vote-difference.negative{color:#c0392b}
.winner-badge-inline{background:#28a745;color:#fff;padding:3px 10px;border-radius:12px;font-size:.85em;white-space:nowrap}
.no-results{padding:20px;text-align:center;color:#888}
.footer{background:#00563f;color:#fff;padding:20px;text-align:center}
.footer-date{opacity:.8;margin-top:8px}
@media print{
  body{background:#fff}
  .simulation-section,.filter-search,.btn-print{display:none}
  .container{box-shadow:none}
  th{position:static}
}
"""

REPORT_SCRIPT = r"""
const LABELS = {BNP: 'BNP', Alliance: 'NCP/Jamaat Alliance'};
const TITLE_ICON = '<svg width="35" height="35" viewBox="0 0 24 24" fill="currentColor"><path d="M12 2l3.09 6.26L22 9.27l-5 4.87 1.18 6.88L12 17.77l-6.18 3.25L7 14.14 2 9.27l6.91-1.01L12 2z"/></svg>';

function filterTable(tableId, searchId) {
    const table = document.getElementById(tableId);
    const searchValue = document.getElementById(searchId).value.toLowerCase();
    const divisionValue = document.getElementById('combinedDivisionFilter').value.toLowerCase();
    const winnerValue = document.getElementById('combinedWinnerFilter').value;
    const rows = table.getElementsByTagName('tbody')[0].getElementsByTagName('tr');
    let visibleCount = 0;

    for (let i = 0; i < rows.length; i++) {
        const row = rows[i];
        const matchesSearch = row.textContent.toLowerCase().includes(searchValue);
        const matchesDivision = !divisionValue || row.getAttribute('data-division').toLowerCase() === divisionValue;
        const matchesWinner = !winnerValue || row.getAttribute('data-winner') === winnerValue;
        const visible = matchesSearch && matchesDivision && matchesWinner;
        row.style.display = visible ? '' : 'none';
        if (visible) visibleCount++;
    }

    const container = table.closest('.table-container');
    let noResults = container.querySelector('.no-results');
    if (visibleCount === 0 && !noResults) {
        noResults = document.createElement('div');
        noResults.className = 'no-results';
        noResults.textContent = 'No results found matching your criteria.';
        container.appendChild(noResults);
    } else if (visibleCount > 0 && noResults) {
        noResults.remove();
    }
}

function printReport() {
    window.print();
}

function clampPercentage(value) {
    return Math.min(%MAX_SWING%, Math.max(%MIN_SWING%, value));
}

function incrementPercentage() {
    const input = document.getElementById('percentageInput');
    input.value = clampPercentage((parseFloat(input.value) || 0) + 1);
}

function decrementPercentage() {
    const input = document.getElementById('percentageInput');
    input.value = clampPercentage((parseFloat(input.value) || 0) - 1);
}

function handleEnterKey(event) {
    if (event.key === 'Enter') {
        applySimulation();
    }
}

function seatWinner(bnpVotes, allianceVotes, hasBnp, hasAlliance) {
    if (hasBnp && !hasAlliance && bnpVotes >= allianceVotes) return 'BNP';
    if (hasAlliance && !hasBnp && allianceVotes >= bnpVotes) return 'Alliance';
    if (bnpVotes > allianceVotes) return 'BNP';
    if (allianceVotes > bnpVotes) return 'Alliance';
    return null;
}

function renderRow(row, bnpVotes, allianceVotes) {
    row.querySelector('.bnp-votes').textContent = bnpVotes.toLocaleString();
    row.querySelector('.alliance-votes').textContent = allianceVotes.toLocaleString();

    const voteDiff = bnpVotes - allianceVotes;
    const diffCell = row.querySelector('.vote-difference');
    diffCell.textContent = (voteDiff > 0 ? '+' : '') + voteDiff.toLocaleString();
    diffCell.className = 'vote-difference ' + (voteDiff > 0 ? 'positive' : 'negative');

    const winner = seatWinner(bnpVotes, allianceVotes,
        row.getAttribute('data-has-bnp') === '1', row.getAttribute('data-has-alliance') === '1');

    row.querySelectorAll('.candidate-name-block').forEach(block => {
        block.classList.toggle('winner-highlighted', block.getAttribute('data-party') === winner);
    });

    const winnerCell = row.querySelector('.winner-column');
    if (winner) {
        winnerCell.innerHTML = '<span class="winner-badge-inline">' + LABELS[winner] + '</span>';
        winnerCell.className = 'winner-cell winner-column';
        row.classList.add('winner-row');
        row.setAttribute('data-winner', 'winner');
    } else {
        winnerCell.innerHTML = '-';
        winnerCell.className = 'winner-column';
        row.classList.remove('winner-row');
        row.setAttribute('data-winner', 'non-winner');
    }
    return winner;
}

function recompute(percentage) {
    const rows = document.getElementById('combinedTable').getElementsByTagName('tbody')[0].getElementsByTagName('tr');
    const totals = {bnpWins: 0, allianceWins: 0, bnpVotes: 0, allianceVotes: 0};

    for (let i = 0; i < rows.length; i++) {
        const row = rows[i];
        const bnp = parseInt(row.getAttribute('data-bnp-votes'), 10);
        const alliance = parseInt(row.getAttribute('data-alliance-votes'), 10);
        const change = Math.round((bnp + alliance) * (percentage / 100));
        const newBnp = Math.max(0, bnp - change);
        const newAlliance = Math.max(0, alliance + change);

        const winner = renderRow(row, newBnp, newAlliance);
        if (winner === 'BNP') totals.bnpWins++;
        if (winner === 'Alliance') totals.allianceWins++;
        totals.bnpVotes += newBnp;
        totals.allianceVotes += newAlliance;
    }

    document.getElementById('bnpSeatsWon').textContent = totals.bnpWins;
    document.getElementById('allianceSeatsWon').textContent = totals.allianceWins;
    document.getElementById('bnpTotalVotes').textContent = totals.bnpVotes.toLocaleString();
    document.getElementById('allianceTotalVotes').textContent = totals.allianceVotes.toLocaleString();
    return totals;
}

function highlightCards(totals, markLoser) {
    const bnpCard = document.getElementById('bnpStatCard');
    const allianceCard = document.getElementById('allianceStatCard');
    bnpCard.classList.remove('winner-highlight', 'loser-highlight');
    allianceCard.classList.remove('winner-highlight', 'loser-highlight');

    if (totals.bnpWins > totals.allianceWins) {
        bnpCard.classList.add('winner-highlight');
        if (markLoser) allianceCard.classList.add('loser-highlight');
    } else if (totals.allianceWins > totals.bnpWins) {
        allianceCard.classList.add('winner-highlight');
        if (markLoser) bnpCard.classList.add('loser-highlight');
    }
}

function applySimulation() {
    const percentage = clampPercentage(parseFloat(document.getElementById('percentageInput').value) || 0);
    const totals = recompute(percentage);
    highlightCards(totals, true);

    document.getElementById('tableHeaderTitle').innerHTML = TITLE_ICON + ' Simulation Applied: %TABLE_TITLE%';
    document.getElementById('infoPercentage').textContent = Math.abs(percentage);
    document.getElementById('infoDirection').textContent = percentage < 0 ? 'Removed' : 'Added';
    document.getElementById('simulationInfoBox').classList.add('show');
}

function resetSimulation() {
    document.getElementById('percentageInput').value = %DEFAULT_SWING%;
    const totals = recompute(0);
    highlightCards(totals, false);

    document.getElementById('tableHeaderTitle').innerHTML = TITLE_ICON + ' %TABLE_TITLE%';
    document.getElementById('simulationInfoBox').classList.remove('show');
}

window.scrollTo(0, 0);
"""

SEAT_ROW_HTML = r"""
<tr class="%ROW_CLASS%" data-division="%DIVISION%" data-winner="%WINNER_FLAG%" data-bnp-votes="%BNP_VOTES_RAW%" data-alliance-votes="%ALLIANCE_VOTES_RAW%" data-seat-id="%SEAT_ID%" data-has-bnp="%HAS_BNP%" data-has-alliance="%HAS_ALLIANCE%">
  <td>%DIVISION%</td>
  <td>%DISTRICT%</td>
  <td>%SEAT_ID%</td>
  <td>%SEAT_NAME%</td>
  <td><div class="candidate-name-block %BNP_HIGHLIGHT%" data-party="BNP"><h4>%BNP_CANDIDATE%</h4><div class="party-label">BNP</div></div></td>
  <td class="votes bnp-votes">%BNP_VOTES%</td>
  <td><div class="candidate-name-block %ALLIANCE_HIGHLIGHT%" data-party="Alliance"><h4>%ALLIANCE_CANDIDATE%</h4><div class="party-label">NCP/Jamaat Alliance</div></div></td>
  <td class="votes alliance-votes">%ALLIANCE_VOTES%</td>
  <td class="vote-difference %DIFF_CLASS%">%VOTE_DIFF%</td>
  <td class="%WINNER_CELL_CLASS%winner-column">%WINNER_CELL%</td>
</tr>"""

REPORT_HTML = r"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>%TITLE%</title>
<style>%CSS%</style>
</head>
<body>
<div class="container">
  <div class="header">
    <h1>%TITLE%</h1>
    <div class="bangla-title">১৩তম জাতীয় সংসদ নির্বাচন</div>
  </div>

  <div class="content">
    <div class="summary">
      <h2>Bangladesh Election 2026 Result Summary</h2>
      <p><strong>Leading side: %LEADER%</strong></p>
      <p>BNP secured <strong>%BNP_WINS% out of %TOTAL_SEATS% seats</strong>. The NCP and Jamaat Alliance (overall) won <strong>%ALLIANCE_WINS% out of %TOTAL_SEATS% seats</strong>.</p>
      <button class="btn-print" onclick="printReport()">Print Report</button>
    </div>

    <div class="simulation-section">
      <h2>Vote Engineering Simulation</h2>
      <p class="simulation-intro">
        Test "what-if" scenarios by moving a percentage of each seat's two-party vote between BNP and the
        NCP/Jamaat Alliance. Positive values move votes to the Alliance, negative values move them to BNP.
      </p>
      <div class="simulation-controls">
        <div class="control-group">
          <label for="percentageInput">Election Engineering:</label>
          <div class="percentage-input-group">
            <button class="btn-adjust" onclick="decrementPercentage()">&minus;</button>
            <input type="number" id="percentageInput" class="percentage-input" value="%DEFAULT_SWING%" min="%MIN_SWING%" max="%MAX_SWING%" step="1" onkeypress="handleEnterKey(event)">
            <button class="btn-adjust" onclick="incrementPercentage()">+</button>
            <span>%</span>
          </div>
        </div>
        <div class="button-group">
          <button class="btn-submit" onclick="applySimulation()">Apply Simulation</button>
          <button class="btn-reset" onclick="resetSimulation()">Reset to Original</button>
        </div>
        <div class="simulation-info-box" id="simulationInfoBox">
          <div class="info-text">
            <strong>Simulation Applied!</strong> <span id="infoDirection">Added</span> <span id="infoPercentage">%DEFAULT_SWING%</span>% votes to NCP/Jamaat Alliance.
            Check the updated seat counts and the individual seat results below.
          </div>
        </div>
      </div>
    </div>

    <div class="stats-grid" id="statsGrid">
      <div class="stat-card bnp %BNP_CARD_CLASS%" id="bnpStatCard">
        <div class="stat-label">BNP</div>
        <div class="stat-number" id="bnpSeatsWon">%BNP_WINS%</div>
        <div class="stat-label">Seats Won</div>
        <div class="stat-votes">Total Votes: <span id="bnpTotalVotes">%BNP_TOTAL_VOTES%</span></div>
      </div>
      <div class="stat-card alliance %ALLIANCE_CARD_CLASS%" id="allianceStatCard">
        <div class="stat-label">NCP/Jamaat Alliance</div>
        <div class="stat-number" id="allianceSeatsWon">%ALLIANCE_WINS%</div>
        <div class="stat-label">Seats Won</div>
        <div class="stat-votes">Total Votes: <span id="allianceTotalVotes">%ALLIANCE_TOTAL_VOTES%</span></div>
      </div>
    </div>

    <div class="party-section">
      <h2 id="tableHeaderTitle" class="party-header-block"><svg width="35" height="35" viewBox="0 0 24 24" fill="currentColor"><path d="M12 2l3.09 6.26L22 9.27l-5 4.87 1.18 6.88L12 17.77l-6.18 3.25L7 14.14 2 9.27l6.91-1.01L12 2z"/></svg> %TABLE_TITLE%</h2>
      <div class="filter-search">
        <input type="text" id="combinedSearch" placeholder="Search by Division, District, Seat, or Candidate..." onkeyup="filterTable('combinedTable', 'combinedSearch')">
        <select id="combinedDivisionFilter" onchange="filterTable('combinedTable', 'combinedSearch')">
          <option value="">All Divisions</option>%DIVISION_OPTIONS%
        </select>
        <select id="combinedWinnerFilter" onchange="filterTable('combinedTable', 'combinedSearch')">
          <option value="">All Results</option>
          <option value="winner">Winners Only</option>
          <option value="non-winner">Non-Winners Only</option>
        </select>
      </div>
      <div class="table-container">
        <table id="combinedTable">
          <thead>
            <tr>
              <th>Division</th>
              <th>District</th>
              <th>Seat ID</th>
              <th>Seat Name</th>
              <th>BNP Candidate</th>
              <th>BNP Votes</th>
              <th>Alliance (NCP + Jamaat) Candidate</th>
              <th>Alliance Votes (NCP + Jamaat)</th>
              <th>Vote Difference</th>
              <th>Winner</th>
            </tr>
          </thead>
          <tbody>%ROWS%
          </tbody>
        </table>
      </div>
    </div>
  </div>

  <div class="footer">
    <div class="footer-title">Bangladesh 13th National Election - 2026</div>
    <div class="footer-date">Generated on %GENERATED_ON%</div>
  </div>
</div>
<script>%SCRIPT%</script>
</body>
</html>
"""
