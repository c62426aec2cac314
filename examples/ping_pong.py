import aiohttp
import pyguild

client = pyguild.Client(token='token')


async def gateway():
    headers = {'Authorization': f'Bearer {client.http.token}'}
    async with aiohttp.ClientSession() as session:
        async with session.ws_connect('wss://www.guilded.gg/websocket/v1', headers=headers) as ws:
            async for message in ws:
                if message.type is aiohttp.WSMsgType.TEXT:
                    yield pyguild.utils.from_json(message.data)
                elif message.type in (aiohttp.WSMsgType.CLOSED, aiohttp.WSMsgType.ERROR):
                    break


@client.on(pyguild.ReadyEvent)
async def on_ready(event: pyguild.ReadyEvent) -> None:
    print('Logged on as', event.me)


@client.on(pyguild.MessageCreateEvent)
async def on_message(event: pyguild.MessageCreateEvent):
    message = event.message

    # don't respond to ourselves
    if client.me is None or message.author_id == client.me.id:
        return

    if message.content == 'ping':
        await message.reply('pong')


client.run(gateway())
